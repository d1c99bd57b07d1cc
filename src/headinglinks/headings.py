"""Extract ATX headings from Markdown text."""

from __future__ import annotations

import re

from headinglinks.schemas import Heading

_HEADING_RE = re.compile(r"^(#{1,6})[ \t]+(\S.*?)\s*$")
_FENCE_RE = re.compile(r"^ {0,3}(`{3,}|~{3,})(.*)$")


def extract_headings(text: str, document: str) -> list[Heading]:
    """Return the headings of ``text`` in line order.

    Only ATX headings count. Setext headings are not recognised and lines
    inside fenced code blocks are skipped.

    Args:
        text: Markdown source of the document.
        document: Identifier stored on every returned heading.

    Returns:
        Headings sorted by ascending ``position`` (zero-based line index).
    """
    headings: list[Heading] = []
    fence: str | None = None

    for index, line in enumerate(text.split("\n")):
        fence_match = _FENCE_RE.match(line)
        if fence_match:
            marker = fence_match.group(1)
            if fence is None:
                fence = marker
                continue
            # Closing fence: same character, at least as long, no info string.
            if marker[0] == fence[0] and len(marker) >= len(fence) and not fence_match.group(2).strip():
                fence = None
                continue
        if fence is not None:
            continue

        match = _HEADING_RE.match(line)
        if match:
            headings.append(
                Heading(
                    text=match.group(2),
                    level=len(match.group(1)),
                    position=index,
                    document=document,
                )
            )
    return headings
