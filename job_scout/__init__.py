"""
Job Match Scout.

Finds companies for free-text industry criteria and screens their current
job postings against the user's criteria with Google-Search-grounded Gemini.
"""

from job_scout.version import __version__

__all__ = ["__version__"]
