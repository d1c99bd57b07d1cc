"""Shared schemas for headinglinks."""

from headinglinks.schemas.headings import ChangeRecord, Heading
from headinglinks.schemas.moves import ConfirmedMove, Correlation, RewriteReport

__all__ = ["ChangeRecord", "ConfirmedMove", "Correlation", "Heading", "RewriteReport"]
