"""
Services for the scout workflow.

- CompanySearchService: industry criteria -> companies
- JobAnalysisService: company + job criteria -> screened postings
- SequentialAnalysisOrchestrator: per-company analysis with streamed progress
- ScoutSession: the three-step workflow state
"""

from job_scout.services.analysis_orchestrator import (
    AnalysisEvent,
    AnalysisFinished,
    AnalysisStarted,
    CompanyAnalyzed,
    SequentialAnalysisOrchestrator,
)
from job_scout.services.company_search_service import CompanySearchService, search_companies
from job_scout.services.job_analysis_service import JobAnalysisService, analyze_company_jobs
from job_scout.services.scout_session import ScoutSession, ScoutStep

__all__ = [
    # Events
    "AnalysisEvent",
    "AnalysisStarted",
    "CompanyAnalyzed",
    "AnalysisFinished",
    # Services
    "CompanySearchService",
    "search_companies",
    "JobAnalysisService",
    "analyze_company_jobs",
    "SequentialAnalysisOrchestrator",
    "ScoutSession",
    "ScoutStep",
]
