"""
Company Search Service.

Step 1 of the scout workflow: turn free-text industry criteria into a list
of candidate companies using a Google-Search-grounded Gemini call.

Usage:
    service = CompanySearchService()
    companies = await service.search_companies("核融合 スタートアップ")
"""

import logging
import time
from typing import Any, List, Optional

from pydantic import ValidationError

from job_scout.common.config import Config
from job_scout.common.error_handling import log_on_exception
from job_scout.common.gemini_client import GeminiSearchClient
from job_scout.common.json_utils import extract_json
from job_scout.common.models import Company
from job_scout.prompts.company_search import build_company_search_prompt

logger = logging.getLogger(__name__)


def make_company_id(index: int, timestamp_ms: Optional[int] = None) -> str:
    """Build an id unique within one search (index) and across searches (timestamp)."""
    if timestamp_ms is None:
        timestamp_ms = int(time.time() * 1000)
    return f"comp-{index}-{timestamp_ms}"


class CompanySearchService:
    """
    Searches for companies matching industry criteria.

    Transport and API errors are logged and re-raised: the caller decides how
    to present a failed search. A reply that does not contain a JSON array
    yields an empty list.
    """

    operation_name: str = "search-companies"

    def __init__(
        self,
        client: Optional[GeminiSearchClient] = None,
        locale: Optional[str] = None,
        max_companies: Optional[int] = None,
        repair_json: Optional[bool] = None,
    ):
        """
        Initialize the service.

        Args:
            client: Gemini client (built from Config when omitted)
            locale: Output language (defaults to Config)
            max_companies: Companies to request (defaults to Config.MAX_COMPANIES)
            repair_json: Enable json-repair fallback (defaults to Config.JSON_REPAIR)

        Raises:
            MissingCredentialError: If no client is given and no API key is configured
        """
        self.client = client or GeminiSearchClient.from_config()
        self.locale = locale or Config.get_output_locale()
        self.max_companies = max_companies or Config.MAX_COMPANIES
        self.repair_json = Config.JSON_REPAIR if repair_json is None else repair_json

    def _to_companies(self, data: Any) -> List[Company]:
        """Map extracted JSON into Company records, skipping unusable entries."""
        if not isinstance(data, list):
            logger.warning(
                f"Company search returned {type(data).__name__}, expected list"
            )
            return []

        timestamp_ms = int(time.time() * 1000)
        companies: List[Company] = []
        for index, item in enumerate(data):
            if not isinstance(item, dict):
                logger.warning(f"Skipping non-object company entry at index {index}")
                continue
            try:
                company = Company.model_validate(
                    {
                        **item,
                        "id": make_company_id(index, timestamp_ms),
                        "selected": True,
                    }
                )
            except ValidationError as e:
                logger.warning(f"Skipping invalid company entry at index {index}: {e.error_count()} errors")
                continue
            companies.append(company)
        return companies

    async def search_companies(self, criteria_text: str) -> List[Company]:
        """
        Search companies for the given industry criteria.

        Args:
            criteria_text: Non-empty free-text industry criteria

        Returns:
            Companies in the order the model listed them, all selected

        Raises:
            ValueError: If criteria_text is blank
            google.genai.errors.APIError: On a failed API call
        """
        if not criteria_text or not criteria_text.strip():
            raise ValueError("criteria_text must not be empty")

        prompt = build_company_search_prompt(
            criteria_text, locale=self.locale, max_companies=self.max_companies
        )

        with log_on_exception(logger, "Company search", include_traceback=True):
            result = await self.client.generate(prompt)

        if not result.text:
            logger.warning("Company search returned no text")
            return []

        data = extract_json(result.text, repair=self.repair_json)
        companies = self._to_companies(data)
        logger.info(f"Company search found {len(companies)} companies")
        return companies


async def search_companies(
    criteria_text: str,
    client: Optional[GeminiSearchClient] = None,
) -> List[Company]:
    """Convenience wrapper around CompanySearchService.search_companies."""
    return await CompanySearchService(client=client).search_companies(criteria_text)
