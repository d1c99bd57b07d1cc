"""Move and rewrite result models."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class ConfirmedMove(BaseModel):
    """A heading rename or relocation inferred by the correlator.

    Attributes:
        document: Document the heading was removed from.
        new_document: Document the heading was added to. Equals ``document``
            for an in-place rename.
        old_heading: Heading text before the move.
        new_heading: Heading text after the move.
        position: Line index of the removed heading.
    """

    model_config = ConfigDict(frozen=True)

    document: str
    new_document: str
    old_heading: str
    new_heading: str
    position: int = Field(..., ge=0)


class Correlation(BaseModel):
    """Outcome of a successful correlation attempt."""

    old_document: str
    new_document: str
    moves: list[ConfirmedMove]


class RewriteReport(BaseModel):
    """Result of one link rewrite pass over the corpus."""

    documents_modified: int = 0
    links_replaced: int = 0
    modified_documents: list[str] = Field(default_factory=list)
    failed_documents: list[str] = Field(default_factory=list)

    def summary(self) -> str:
        """Human-readable one-line summary."""
        noun = "document" if self.documents_modified == 1 else "documents"
        text = f"Updated heading links in {self.documents_modified} {noun}"
        if self.links_replaced:
            text += f" ({self.links_replaced} link{'' if self.links_replaced == 1 else 's'})"
        if self.failed_documents:
            text += f"; {len(self.failed_documents)} could not be updated"
        return text
