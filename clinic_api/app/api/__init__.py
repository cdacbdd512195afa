"""
API package containing the HTTP routes.

``router`` aggregates the domain‑specific routers defined in
``endpoints`` and is mounted under ``/api`` by the application.
"""
