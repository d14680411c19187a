"""Staffing agency job posting and client access portal."""

__version__ = "0.1.0"
