"""
Prompts and status messages for Job Match Scout.

- company_search: industry criteria -> JSON array of companies
- job_analysis: company + job criteria -> JSON object of screened postings
- messages: localized fallback summaries
"""

from job_scout.prompts.company_search import build_company_search_prompt
from job_scout.prompts.job_analysis import build_job_analysis_prompt
from job_scout.prompts.messages import get_message

__all__ = [
    "build_company_search_prompt",
    "build_job_analysis_prompt",
    "get_message",
]
