"""
Pydantic schema definitions for API payloads.

Each record kind (appointments, contacts) defines its own models for
the normalised request and the persisted record.  Schemas are kept
separate from the stores so that the on‑disk representation is only
ever produced from a validated model.
"""
