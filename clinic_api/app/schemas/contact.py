"""Pydantic models for contact messages."""

from typing import Literal

from pydantic import BaseModel, Field

CONTACT_UNREAD = "unread"


class ContactCreate(BaseModel):
    """Normalised contact message, built after validation has passed."""

    name: str = Field(..., examples=["Jo"])
    email: str = Field(..., examples=["jo@x.co"])
    message: str = Field(..., examples=["Hello there"])


class Contact(BaseModel):
    id: int
    timestamp: str
    name: str
    email: str
    message: str
    status: Literal["unread"] = CONTACT_UNREAD
