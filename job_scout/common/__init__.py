"""Shared configuration, logging, parsing and Gemini client for the scout services."""
