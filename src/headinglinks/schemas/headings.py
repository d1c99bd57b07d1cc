"""Heading models."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class Heading(BaseModel):
    """An ATX heading extracted from a document."""

    model_config = ConfigDict(frozen=True)

    text: str
    level: int = Field(..., ge=1, le=6)
    position: int = Field(..., ge=0)
    document: str


class ChangeRecord(BaseModel):
    """Headings that appeared in (or vanished from) one document."""

    document: str
    headings: list[Heading] = Field(default_factory=list)
