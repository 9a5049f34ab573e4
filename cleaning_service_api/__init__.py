"""
Top‑level package for the Cleaning Service booking API.

This file makes ``cleaning_service_api`` a Python package so that
modules within ``app`` can be imported using fully qualified names
like ``cleaning_service_api.app.main``.

The package provides no public exports; all functionality lives in
submodules under ``app``.
"""

__all__ = []
