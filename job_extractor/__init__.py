"""Structured job-posting extraction from loaded web pages."""

__version__ = "0.1.0"
