"""
Top‑level package for the HealthCare+ clinic API.

The HTTP application lives under ``app`` and can be imported as
``clinic_api.app.main``.  The ``serverless`` module exposes the same
operations as function handlers for serverless deployments.

The package provides no public exports; all functionality lives in
submodules.
"""

__all__ = []
