"""
Job Analysis Service.

Step 2 of the scout workflow, run once per selected company: search the
company's current postings and screen them against the user's criteria.

``analyze_company_jobs`` never raises. It runs inside a per-company loop,
so every failure degrades to an empty job list with a status summary.
"""

import logging
from typing import Any, List, Optional

from pydantic import ValidationError

from job_scout.common.config import Config
from job_scout.common.gemini_client import GeminiSearchClient
from job_scout.common.json_utils import extract_json
from job_scout.common.models import JobAnalysis, JobPosting
from job_scout.prompts.job_analysis import build_job_analysis_prompt
from job_scout.prompts.messages import (
    ANALYSIS_COMPLETE,
    COMPANY_ANALYSIS_ERROR,
    NO_DATA,
    PARSE_FAILED,
    get_message,
)

logger = logging.getLogger(__name__)


class JobAnalysisService:
    """Analyzes one company's job postings per call."""

    operation_name: str = "analyze-company-jobs"

    def __init__(
        self,
        client: Optional[GeminiSearchClient] = None,
        locale: Optional[str] = None,
        repair_json: Optional[bool] = None,
    ):
        """
        Initialize the service.

        Raises:
            MissingCredentialError: If no client is given and no API key is configured
        """
        self.client = client or GeminiSearchClient.from_config()
        self.locale = locale or Config.get_output_locale()
        self.repair_json = Config.JSON_REPAIR if repair_json is None else repair_json

    def _empty(self, message_key: str) -> JobAnalysis:
        return JobAnalysis(jobs=[], summary=get_message(message_key, self.locale))

    def _to_jobs(self, raw_jobs: Any, company_name: str) -> List[JobPosting]:
        if not isinstance(raw_jobs, list):
            return []

        jobs: List[JobPosting] = []
        for index, item in enumerate(raw_jobs):
            if not isinstance(item, dict):
                logger.warning(f"[{company_name}] Skipping non-object job entry at index {index}")
                continue
            try:
                jobs.append(JobPosting.model_validate(item))
            except ValidationError as e:
                logger.warning(
                    f"[{company_name}] Skipping invalid job entry at index {index}: "
                    f"{e.error_count()} errors"
                )
        return jobs

    async def analyze_company_jobs(self, company_name: str, criteria_text: str) -> JobAnalysis:
        """
        Search and screen one company's job postings.

        Args:
            company_name: Company to research
            criteria_text: User's job screening criteria

        Returns:
            JobAnalysis; on any failure, empty jobs with a localized summary
        """
        try:
            prompt = build_job_analysis_prompt(company_name, criteria_text, locale=self.locale)
            result = await self.client.generate(prompt)

            if not result.text:
                logger.warning(f"[{company_name}] Job analysis returned no text")
                return self._empty(NO_DATA)

            data = extract_json(result.text, repair=self.repair_json)
            if not isinstance(data, dict):
                logger.warning(f"[{company_name}] Could not extract a JSON object from the reply")
                return self._empty(PARSE_FAILED)

            jobs = self._to_jobs(data.get("jobs"), company_name)
            summary = data.get("summary")
            if not isinstance(summary, str) or not summary.strip():
                summary = get_message(ANALYSIS_COMPLETE, self.locale)

            logger.info(f"[{company_name}] Job analysis found {len(jobs)} matching postings")
            return JobAnalysis(jobs=jobs, summary=summary)

        except Exception as e:
            logger.error(f"Error analyzing jobs for {company_name}: {type(e).__name__}: {e}")
            return self._empty(COMPANY_ANALYSIS_ERROR)


async def analyze_company_jobs(
    company_name: str,
    criteria_text: str,
    client: Optional[GeminiSearchClient] = None,
) -> JobAnalysis:
    """Convenience wrapper around JobAnalysisService.analyze_company_jobs."""
    return await JobAnalysisService(client=client).analyze_company_jobs(company_name, criteria_text)
