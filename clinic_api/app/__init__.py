"""
Application package initializer.

The application is split into a small number of layers: ``core`` holds
configuration, logging, error types and the record stores; ``schemas``
holds the Pydantic models for request and response payloads;
``services`` holds validation, record creation and statistics; ``api``
exposes the HTTP routes.  Both the FastAPI application and the
serverless handlers consume the same services.
"""

from .main import app  # noqa: F401
