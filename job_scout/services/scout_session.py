"""
Scout Session - the three-step workflow state.

    DEFINE_CRITERIA -> SELECT_COMPANIES -> ANALYZE_JOBS

A session owns the criteria, the company list with the user's selection and
the per-company analysis results. A UI layer renders from these attributes
and calls the transition methods.
"""

import logging
from enum import IntEnum
from typing import AsyncIterator, List, Optional

from job_scout.common.config import Config
from job_scout.common.logger import configure_logging
from job_scout.common.models import Company, CompanyAnalysis, SearchCriteria
from job_scout.prompts.messages import SEARCH_FAILED, get_message
from job_scout.services.analysis_orchestrator import (
    AnalysisEvent,
    SequentialAnalysisOrchestrator,
)
from job_scout.services.company_search_service import CompanySearchService
from job_scout.services.job_analysis_service import JobAnalysisService

logger = logging.getLogger(__name__)


class ScoutStep(IntEnum):
    DEFINE_CRITERIA = 0
    SELECT_COMPANIES = 1
    ANALYZE_JOBS = 2


class ScoutSession:
    """
    Workflow state for one user.

    Attributes:
        step: Current workflow step
        criteria: Criteria of the current search cycle
        companies: Companies from the last search, with selection flags
        results: Latest per-company analysis snapshot
        is_searching: True while the company search call is running
        search_error: Localized message for the last failed search, else None
    """

    def __init__(
        self,
        search_service: Optional[CompanySearchService] = None,
        orchestrator: Optional[SequentialAnalysisOrchestrator] = None,
        configure_logs: bool = True,
    ):
        if configure_logs:
            configure_logging()
        self.search_service = search_service or CompanySearchService()
        self.orchestrator = orchestrator or SequentialAnalysisOrchestrator(JobAnalysisService())

        self.step = ScoutStep.DEFINE_CRITERIA
        self.criteria: Optional[SearchCriteria] = None
        self.companies: List[Company] = []
        self.results: List[CompanyAnalysis] = []
        self.is_searching = False
        self.search_error: Optional[str] = None
        self._run_token = 0

    @property
    def is_analyzing(self) -> bool:
        return self.orchestrator.is_analyzing

    # ===== Step 1: criteria -> companies =====

    async def search(self, criteria: SearchCriteria) -> List[Company]:
        """
        Search companies for the criteria and move to company selection.

        On failure the session stays at DEFINE_CRITERIA and the error propagates.
        """
        self.criteria = criteria
        self.search_error = None
        self.is_searching = True
        try:
            companies = await self.search_service.search_companies(criteria.industry_text)
        except Exception:
            locale = getattr(self.search_service, "locale", None) or Config.get_output_locale()
            self.search_error = get_message(SEARCH_FAILED, locale)
            raise
        finally:
            self.is_searching = False

        self.companies = companies
        self.results = []
        self.step = ScoutStep.SELECT_COMPANIES
        logger.info(f"Search complete: {len(companies)} companies to choose from")
        return companies

    # ===== Step 2: selection =====

    def _find(self, company_id: str) -> int:
        for position, company in enumerate(self.companies):
            if company.id == company_id:
                return position
        raise KeyError(company_id)

    def toggle_company(self, company_id: str) -> Company:
        """Flip the selection of one company and return the updated record."""
        position = self._find(company_id)
        company = self.companies[position]
        updated = company.model_copy(update={"selected": not company.selected})
        self.companies[position] = updated
        return updated

    def set_all_selected(self, selected: bool) -> None:
        self.companies = [c.model_copy(update={"selected": selected}) for c in self.companies]

    def selected_companies(self) -> List[Company]:
        return [c for c in self.companies if c.selected]

    # ===== Step 3: analysis =====

    async def start_analysis(self) -> AsyncIterator[AnalysisEvent]:
        """
        Analyze the selected companies, mirroring each event into ``results``.

        Raises:
            RuntimeError: If no search has been made yet or nothing is selected
        """
        if self.criteria is None or self.step != ScoutStep.SELECT_COMPANIES:
            raise RuntimeError("Search for companies before starting the analysis")

        selected = self.selected_companies()
        if not selected:
            raise RuntimeError("Select at least one company before starting the analysis")

        self.step = ScoutStep.ANALYZE_JOBS
        self._run_token += 1
        token = self._run_token

        async for event in self.orchestrator.run(selected, self.criteria.job_text):
            # stale once reset() or a newer run has taken over results
            if token == self._run_token:
                self.results = list(event.results)
            yield event

    def pending_count(self) -> int:
        return sum(1 for r in self.results if r.is_loading)

    def finished_results(self) -> List[CompanyAnalysis]:
        return [r for r in self.results if r.is_analyzed]

    def reset(self) -> None:
        """Return to criteria entry; the previous criteria are kept for editing."""
        self.step = ScoutStep.DEFINE_CRITERIA
        self.companies = []
        self.results = []
        self.search_error = None
        self._run_token += 1
