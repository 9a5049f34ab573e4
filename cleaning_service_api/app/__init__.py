"""
Application package initializer.

The backend is split into a handful of small pieces: ``core`` holds
configuration, logging, persistence and token handling; ``schemas``
holds the Pydantic request/response models; ``services`` holds the
business logic for users, the service catalog and bookings; and
``api/v1/endpoints`` exposes that logic over HTTP.
"""

from .main import app  # noqa: F401
