"""Detect headings added or removed between two snapshots."""

from __future__ import annotations

from typing import Sequence

from headinglinks.schemas import Heading


def diff_headings(baseline: Sequence[Heading], candidate: Sequence[Heading]) -> list[Heading]:
    """Return headings in ``candidate`` that have no counterpart in ``baseline``.

    Matching is by text only and follows multiset semantics: each baseline
    heading absorbs at most one candidate heading, so duplicate titles are
    counted individually.
    """
    unmatched = list(baseline)
    changed: list[Heading] = []
    for heading in candidate:
        for index, existing in enumerate(unmatched):
            if existing.text == heading.text:
                del unmatched[index]
                break
        else:
            changed.append(heading)
    return changed


def heading_changes(
    before: Sequence[Heading], after: Sequence[Heading]
) -> tuple[list[Heading], list[Heading]]:
    """Return ``(added, removed)`` headings for one document edit."""
    return diff_headings(before, after), diff_headings(after, before)
