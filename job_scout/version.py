"""
Version information for Job Match Scout.

This file is the single source of truth for version numbers.
"""

__version__ = "0.1.0"
