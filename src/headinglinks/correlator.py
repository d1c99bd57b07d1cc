"""Pair removed and added headings into confirmed moves."""

from __future__ import annotations

import logging
from enum import Enum
from typing import Sequence

from headinglinks.changes import heading_changes
from headinglinks.config import HEADINGLINKS_CLEAR_ON_MISS
from headinglinks.schemas import ChangeRecord, ConfirmedMove, Correlation, Heading

logger = logging.getLogger(__name__)


class CorrelatorState(str, Enum):
    """Fill level of the pending move buffer."""

    EMPTY = "empty"
    PARTIALLY_FILLED = "partially_filled"
    FILLED = "filled"


class MoveCorrelator:
    """Accumulate one removal and one addition record and pair them.

    A heading move reaches us as two unrelated change notifications: the
    document the section was cut from and the document it was pasted into.
    An in-place rename produces both sides from a single notification. The
    latest record for each side always replaces the previous one.

    Args:
        clear_on_miss: Drop both records when a correlation attempt finds no
            pair. By default they are kept until overwritten.
    """

    def __init__(self, *, clear_on_miss: bool = HEADINGLINKS_CLEAR_ON_MISS) -> None:
        self.clear_on_miss = clear_on_miss
        self.removal: ChangeRecord | None = None
        self.addition: ChangeRecord | None = None

    @property
    def state(self) -> CorrelatorState:
        filled = sum(record is not None for record in (self.removal, self.addition))
        if filled == 2:
            return CorrelatorState.FILLED
        if filled == 1:
            return CorrelatorState.PARTIALLY_FILLED
        return CorrelatorState.EMPTY

    def reset(self) -> None:
        """Empty both slots."""
        self.removal = None
        self.addition = None

    def observe(
        self,
        document: str,
        before: Sequence[Heading],
        after: Sequence[Heading],
    ) -> Correlation | None:
        """Record one document change and correlate if both sides are known.

        Args:
            document: The document that changed.
            before: Its heading snapshot prior to the change.
            after: Its headings as extracted from the new content.

        Returns:
            The confirmed moves, or None when nothing could be paired yet.
        """
        added, removed = heading_changes(before, after)
        if added:
            self.addition = ChangeRecord(document=document, headings=added)
            logger.debug("Addition slot set: %s (%d headings)", document, len(added))
        if removed:
            self.removal = ChangeRecord(document=document, headings=removed)
            logger.debug("Removal slot set: %s (%d headings)", document, len(removed))

        if self.state is not CorrelatorState.FILLED:
            return None
        return self.correlate()

    def correlate(self) -> Correlation | None:
        """Pair the buffered records, clearing them on success."""
        if self.removal is None or self.addition is None:
            return None

        moves = pair_headings(self.removal.headings, self.addition.headings)
        if not moves:
            logger.debug(
                "No moves between %s and %s", self.removal.document, self.addition.document
            )
            if self.clear_on_miss:
                self.reset()
            return None

        correlation = Correlation(
            old_document=self.removal.document,
            new_document=self.addition.document,
            moves=moves,
        )
        self.reset()
        logger.info(
            "Confirmed %d heading move(s) from %s to %s",
            len(moves),
            correlation.old_document,
            correlation.new_document,
        )
        return correlation


def pair_headings(
    removed: Sequence[Heading], added: Sequence[Heading]
) -> list[ConfirmedMove]:
    """Match added headings to removed ones.

    For each added heading the first removed heading wins under these rules,
    in priority order:

    1. same document, same position, different text (renamed in place);
    2. different document, same text (moved to another document).

    Each removed heading is consumed by at most one match.
    """
    available = list(removed)
    moves: list[ConfirmedMove] = []
    for new in added:
        match = _find_match(available, new)
        if match is None:
            continue
        available.remove(match)
        moves.append(
            ConfirmedMove(
                document=match.document,
                new_document=new.document,
                old_heading=match.text,
                new_heading=new.text,
                position=match.position,
            )
        )
    return moves


def _find_match(candidates: Sequence[Heading], new: Heading) -> Heading | None:
    for old in candidates:
        if old.document == new.document and old.position == new.position and old.text != new.text:
            return old
    for old in candidates:
        if old.document != new.document and old.text == new.text:
            return old
    return None
