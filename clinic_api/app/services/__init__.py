"""
Service layer abstraction.

Services encapsulate validation, persistence and aggregation.  They
receive a record store explicitly so that the JSON file store used in
production can be swapped for the in‑memory store in tests without
changing API handlers or serverless functions.
"""
