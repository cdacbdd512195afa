"""
Pydantic model for the admin statistics panel.

Field names are camelCase because they are the JSON keys consumed by
the browser panel.  Recent lists hold full stored records, newest
first.
"""

from typing import Any, Dict, List

from pydantic import BaseModel, Field


class StatsRead(BaseModel):
    appointmentTotal: int = Field(..., ge=0)
    contactTotal: int = Field(..., ge=0)
    pendingAppointments: int = Field(..., ge=0)
    unreadContacts: int = Field(..., ge=0)
    recentAppointments: List[Dict[str, Any]] = Field(default_factory=list, max_length=5)
    recentContacts: List[Dict[str, Any]] = Field(default_factory=list, max_length=5)
    lastUpdated: str = Field(..., description="Aggregation time, ISO‑8601 UTC")
