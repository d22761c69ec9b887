"""
Unit tests for job_scout/services/analysis_orchestrator.py

Tests the event stream contract: one initial event with every company
pending, one update per company in input order, per-company failure
isolation and strictly sequential execution.
"""

import asyncio

import pytest

from job_scout.common.models import Company, JobAnalysis, JobPosting
from job_scout.services.analysis_orchestrator import (
    AnalysisFinished,
    AnalysisStarted,
    CompanyAnalyzed,
    SequentialAnalysisOrchestrator,
)


# ===== FIXTURES =====

class RecordingAnalyzer:
    """Analyzer double that records calls and tracks concurrent calls."""

    def __init__(self, fail_for=(), locale="ja"):
        self.fail_for = set(fail_for)
        self.locale = locale
        self.calls = []
        self.in_flight = 0
        self.max_in_flight = 0

    async def analyze_company_jobs(self, company_name, criteria_text):
        self.calls.append((company_name, criteria_text))
        self.in_flight += 1
        self.max_in_flight = max(self.max_in_flight, self.in_flight)
        try:
            await asyncio.sleep(0)
            if company_name in self.fail_for:
                raise ConnectionError(f"network down for {company_name}")
            return JobAnalysis(
                jobs=[JobPosting(role=f"{company_name} engineer", match_score=75)],
                summary=f"{company_name} is hiring",
            )
        finally:
            self.in_flight -= 1


@pytest.fixture
def companies():
    return [
        Company(id=f"comp-{i}-1700000000000", name=name)
        for i, name in enumerate(["Alpha", "Beta", "Gamma"])
    ]


async def _collect(orchestrator, companies, criteria="高卒可"):
    return [event async for event in orchestrator.run(companies, criteria)]


# ===== TESTS =====

class TestEventStream:
    """Tests for the published event sequence."""

    @pytest.mark.asyncio
    async def test_initial_event_has_all_companies_loading(self, companies):
        events = await _collect(SequentialAnalysisOrchestrator(RecordingAnalyzer()), companies)

        started = [e for e in events if isinstance(e, AnalysisStarted)]
        assert len(started) == 1
        assert events[0] is started[0]
        assert [r.company_id for r in started[0].results] == [c.id for c in companies]
        assert all(r.is_loading and not r.is_analyzed for r in started[0].results)
        assert all(r.jobs == [] and r.summary == "" for r in started[0].results)

    @pytest.mark.asyncio
    async def test_one_update_per_company_in_input_order(self, companies):
        events = await _collect(SequentialAnalysisOrchestrator(RecordingAnalyzer()), companies)

        updates = [e for e in events if isinstance(e, CompanyAnalyzed)]
        assert len(updates) == 3
        assert [u.index for u in updates] == [0, 1, 2]
        assert [u.analysis.company_name for u in updates] == ["Alpha", "Beta", "Gamma"]

        # Each update flips exactly one more entry out of loading
        for step, update in enumerate(updates, start=1):
            loading = [r.is_loading for r in update.results]
            assert loading == [False] * step + [True] * (3 - step)
            assert update.analysis.is_analyzed is True
            assert update.analysis.is_loading is False

    @pytest.mark.asyncio
    async def test_finishes_with_all_analyzed(self, companies):
        orchestrator = SequentialAnalysisOrchestrator(RecordingAnalyzer())
        events = await _collect(orchestrator, companies)

        assert isinstance(events[-1], AnalysisFinished)
        assert len(events) == 5
        assert all(r.is_analyzed and not r.is_loading for r in events[-1].results)
        assert orchestrator.is_analyzing is False

    @pytest.mark.asyncio
    async def test_snapshots_are_not_mutated_later(self, companies):
        events = await _collect(SequentialAnalysisOrchestrator(RecordingAnalyzer()), companies)

        assert all(r.is_loading for r in events[0].results)
        assert events[1].results[1].is_loading is True

    @pytest.mark.asyncio
    async def test_results_carry_jobs_and_summary(self, companies):
        results = await SequentialAnalysisOrchestrator(RecordingAnalyzer()).analyze_all(companies, "x")

        assert [r.summary for r in results] == ["Alpha is hiring", "Beta is hiring", "Gamma is hiring"]
        assert results[0].jobs[0].role == "Alpha engineer"

    @pytest.mark.asyncio
    async def test_empty_selection(self):
        events = await _collect(SequentialAnalysisOrchestrator(RecordingAnalyzer()), [])

        assert [type(e) for e in events] == [AnalysisStarted, AnalysisFinished]
        assert events[0].results == ()

    @pytest.mark.asyncio
    async def test_duplicate_ids_each_keep_their_own_entry(self):
        twins = [
            Company(id="comp-0-1", name="Alpha"),
            Company(id="comp-0-1", name="Alpha Holdings"),
        ]
        orchestrator = SequentialAnalysisOrchestrator(RecordingAnalyzer())

        results = await orchestrator.analyze_all(twins, "x")

        assert [r.summary for r in results] == ["Alpha is hiring", "Alpha Holdings is hiring"]
        assert all(r.is_analyzed and not r.is_loading for r in results)


class TestFailureIsolation:
    """Tests for per-company failure handling."""

    @pytest.mark.asyncio
    async def test_failure_of_second_company_does_not_stop_others(self, companies):
        analyzer = RecordingAnalyzer(fail_for={"Beta"})
        orchestrator = SequentialAnalysisOrchestrator(analyzer)

        events = await _collect(orchestrator, companies)
        updates = [e for e in events if isinstance(e, CompanyAnalyzed)]

        assert [u.failed for u in updates] == [False, True, False]
        final = events[-1].results
        assert final[0].summary == "Alpha is hiring"
        assert final[2].summary == "Gamma is hiring"
        assert len(final[0].jobs) == 1 and len(final[2].jobs) == 1

        assert final[1].summary == "分析中にエラーが発生しました。"
        assert final[1].jobs == []
        assert final[1].is_analyzed is True and final[1].is_loading is False

    @pytest.mark.asyncio
    async def test_failures_are_collected(self, companies):
        orchestrator = SequentialAnalysisOrchestrator(RecordingAnalyzer(fail_for={"Beta"}))
        await orchestrator.analyze_all(companies, "x")

        assert orchestrator.errors.has_errors()
        summary = orchestrator.errors.summary()
        assert summary["total"] == 1
        assert summary["subjects"] == ["Beta"]
        assert summary["by_exception_type"] == {"ConnectionError": 1}

    @pytest.mark.asyncio
    async def test_errors_reset_between_runs(self, companies):
        analyzer = RecordingAnalyzer(fail_for={"Beta"})
        orchestrator = SequentialAnalysisOrchestrator(analyzer)
        await orchestrator.analyze_all(companies, "x")

        analyzer.fail_for.clear()
        await orchestrator.analyze_all(companies, "x")

        assert not orchestrator.errors.has_errors()

    @pytest.mark.asyncio
    async def test_english_error_summary(self, companies):
        orchestrator = SequentialAnalysisOrchestrator(RecordingAnalyzer(fail_for={"Alpha"}, locale="en"))
        results = await orchestrator.analyze_all(companies, "x")

        assert results[0].summary == "An error occurred during analysis."


class TestSequentialExecution:
    """Tests for ordering and concurrency."""

    @pytest.mark.asyncio
    async def test_at_most_one_call_in_flight(self, companies):
        analyzer = RecordingAnalyzer()
        await SequentialAnalysisOrchestrator(analyzer).analyze_all(companies, "高卒可")

        assert analyzer.max_in_flight == 1
        assert analyzer.calls == [("Alpha", "高卒可"), ("Beta", "高卒可"), ("Gamma", "高卒可")]

    @pytest.mark.asyncio
    async def test_initial_event_precedes_any_call(self, companies):
        analyzer = RecordingAnalyzer()
        stream = SequentialAnalysisOrchestrator(analyzer).run(companies, "x")

        first = await stream.__anext__()

        assert isinstance(first, AnalysisStarted)
        assert analyzer.calls == []
        await stream.aclose()

    @pytest.mark.asyncio
    async def test_is_analyzing_flag_during_run(self, companies):
        orchestrator = SequentialAnalysisOrchestrator(RecordingAnalyzer())
        flags = []
        async for _ in orchestrator.run(companies, "x"):
            flags.append(orchestrator.is_analyzing)

        assert flags == [True, True, True, True, False]

    @pytest.mark.asyncio
    async def test_on_event_callback_receives_every_event(self, companies):
        seen = []
        orchestrator = SequentialAnalysisOrchestrator(RecordingAnalyzer(), on_event=seen.append)

        events = await _collect(orchestrator, companies)

        assert seen == events
