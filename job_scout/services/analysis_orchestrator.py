"""
Sequential Analysis Orchestrator.

Runs the job analysis for every selected company one at a time and streams
progress as events:

    AnalysisStarted   - every company pending (is_loading=True)
    CompanyAnalyzed   - one per company, in input order
    AnalysisFinished  - batch done, is_analyzing cleared

Companies are analyzed strictly sequentially: at most one Gemini call is in
flight, which keeps the batch under the API rate limits and lets each
company's result be shown as soon as it is ready.

Usage:
    orchestrator = SequentialAnalysisOrchestrator(JobAnalysisService())
    async for event in orchestrator.run(companies, criteria_text):
        render(event.results)
"""

import uuid
from dataclasses import dataclass
from typing import AsyncIterator, Callable, List, Optional, Protocol, Sequence, Tuple, Union

from job_scout.common.config import Config
from job_scout.common.error_handling import ErrorCollector
from job_scout.common.logger import get_logger
from job_scout.common.models import Company, CompanyAnalysis, JobAnalysis
from job_scout.prompts.messages import BATCH_ANALYSIS_ERROR, get_message


class JobAnalyzer(Protocol):
    """Anything that can analyze one company (JobAnalysisService in production)."""

    async def analyze_company_jobs(self, company_name: str, criteria_text: str) -> JobAnalysis:
        ...


@dataclass(frozen=True)
class AnalysisStarted:
    """Initial state: one pending entry per company."""

    run_id: str
    results: Tuple[CompanyAnalysis, ...]


@dataclass(frozen=True)
class CompanyAnalyzed:
    """One company finished (successfully or with an error summary)."""

    run_id: str
    index: int
    analysis: CompanyAnalysis
    results: Tuple[CompanyAnalysis, ...]
    failed: bool = False


@dataclass(frozen=True)
class AnalysisFinished:
    """The batch is done; no entry is loading any more."""

    run_id: str
    results: Tuple[CompanyAnalysis, ...]


AnalysisEvent = Union[AnalysisStarted, CompanyAnalyzed, AnalysisFinished]
EventCallback = Callable[[AnalysisEvent], None]


class SequentialAnalysisOrchestrator:
    """
    Drives per-company job analysis for a batch of selected companies.

    Attributes:
        is_analyzing: True while a batch is running
        errors: Failures isolated during the last batch
    """

    operation_name: str = "analyze-batch"

    def __init__(
        self,
        analyzer: JobAnalyzer,
        on_event: Optional[EventCallback] = None,
        locale: Optional[str] = None,
    ):
        self.analyzer = analyzer
        self.locale = locale or getattr(analyzer, "locale", None) or Config.get_output_locale()
        self.on_event = on_event
        self.is_analyzing = False
        self.errors = ErrorCollector()

    def create_run_id(self) -> str:
        return f"op_{self.operation_name}_{uuid.uuid4().hex[:12]}"

    def _emit(self, event: AnalysisEvent) -> AnalysisEvent:
        if self.on_event is not None:
            self.on_event(event)
        return event

    async def run(
        self, companies: Sequence[Company], criteria_text: str
    ) -> AsyncIterator[AnalysisEvent]:
        """
        Analyze the given companies one by one, yielding progress events.

        Args:
            companies: The user's selected companies, in display order
            criteria_text: Job screening criteria

        Yields:
            AnalysisStarted, then one CompanyAnalyzed per company, then AnalysisFinished
        """
        run_id = self.create_run_id()
        run_log = get_logger(__name__, run_id=run_id, step="analysis")

        self.errors.clear()
        self.is_analyzing = True

        results: List[CompanyAnalysis] = [CompanyAnalysis.pending(c) for c in companies]
        run_log.info(f"Starting analysis of {len(results)} companies")

        try:
            yield self._emit(AnalysisStarted(run_id=run_id, results=tuple(results)))

            for index, company in enumerate(companies):
                pending = results[index]
                failed = False
                try:
                    analysis = await self.analyzer.analyze_company_jobs(company.name, criteria_text)
                    updated = pending.complete(analysis.jobs, analysis.summary)
                except Exception as e:
                    # analyze_company_jobs should never raise; isolate it if it does
                    failed = True
                    run_log.error(f"Failed to analyze {company.name}: {type(e).__name__}: {e}")
                    self.errors.add_error(
                        operation="analyze_company_jobs",
                        subject=company.name,
                        message=str(e),
                        exception=e,
                    )
                    updated = pending.complete(
                        [], get_message(BATCH_ANALYSIS_ERROR, self.locale)
                    )

                results[index] = updated
                run_log.info(
                    f"[{index + 1}/{len(results)}] {company.name}: "
                    f"{len(updated.jobs)} jobs{' (error)' if failed else ''}"
                )
                yield self._emit(
                    CompanyAnalyzed(
                        run_id=run_id,
                        index=index,
                        analysis=updated,
                        results=tuple(results),
                        failed=failed,
                    )
                )
        finally:
            self.is_analyzing = False

        run_log.info(
            f"Analysis finished: {len(results)} companies, {len(self.errors.errors)} failures"
        )
        yield self._emit(AnalysisFinished(run_id=run_id, results=tuple(results)))

    async def analyze_all(
        self, companies: Sequence[Company], criteria_text: str
    ) -> List[CompanyAnalysis]:
        """Run the whole batch and return the final results."""
        final: Tuple[CompanyAnalysis, ...] = ()
        async for event in self.run(companies, criteria_text):
            final = event.results
        return list(final)
