"""Find and rewrite wiki links that point at a heading anchor.

Two surface forms are recognised::

    [[Note#Heading]]            [[Note#Heading|alias]]
    \\[\\[Note#Heading\\]\\]    \\[\\[Note#Heading|alias\\]\\]

The second form is how query blocks store links. Matching is literal, so
heading text never needs escaping.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable

from headinglinks.schemas import ConfirmedMove


@dataclass(frozen=True)
class LinkSyntax:
    """Delimiters of one wiki link surface form."""

    name: str
    opener: str
    closer: str
    alias_separators: tuple[str, ...]


DIRECT = LinkSyntax("direct", "[[", "]]", ("|",))
QUERY_ESCAPED = LinkSyntax("query", "\\[\\[", "\\]\\]", ("\\|", "|"))
SYNTAXES: tuple[LinkSyntax, ...] = (DIRECT, QUERY_ESCAPED)


@dataclass(frozen=True)
class LinkMatch:
    """A heading link located in a text.

    ``alias`` keeps the separator, e.g. ``"|See intro"``, so it can be
    reattached verbatim.
    """

    start: int
    end: int
    syntax: LinkSyntax
    document: str
    heading: str
    alias: str | None = None

    def render(self, document: str, heading: str) -> str:
        """Build the same link in the same syntax, pointing at ``document#heading``."""
        return f"{self.syntax.opener}{document}#{heading}{self.alias or ''}{self.syntax.closer}"


def find_heading_links(text: str, document: str, heading: str) -> list[LinkMatch]:
    """Return every link to ``document#heading`` in ``text``, by position."""
    matches: list[LinkMatch] = []
    target = f"{document}#{heading}"
    for syntax in SYNTAXES:
        matches.extend(_scan(text, syntax, target, document, heading))
    matches.sort(key=lambda match: match.start)
    return matches


def _scan(
    text: str, syntax: LinkSyntax, target: str, document: str, heading: str
) -> Iterable[LinkMatch]:
    prefix = syntax.opener + target
    start = text.find(prefix)
    while start != -1:
        cursor = start + len(prefix)
        match: LinkMatch | None = None
        if text.startswith(syntax.closer, cursor):
            match = LinkMatch(start, cursor + len(syntax.closer), syntax, document, heading)
        else:
            alias = _read_alias(text, cursor, syntax)
            if alias is not None:
                end = cursor + len(alias) + len(syntax.closer)
                match = LinkMatch(start, end, syntax, document, heading, alias)

        if match is not None:
            yield match
            start = text.find(prefix, match.end)
        else:
            start = text.find(prefix, start + 1)


def _read_alias(text: str, cursor: int, syntax: LinkSyntax) -> str | None:
    for separator in syntax.alias_separators:
        if not text.startswith(separator, cursor):
            continue
        close = text.find(syntax.closer, cursor + len(separator))
        if close == -1:
            return None
        alias = text[cursor:close]
        # Aliases stay on one line and never contain another link.
        if "\n" in alias or syntax.opener in alias or DIRECT.opener in alias:
            return None
        return alias
    return None


def rewrite_heading_links(
    text: str,
    old_document: str,
    new_document: str,
    moves: Iterable[ConfirmedMove],
) -> tuple[str, int]:
    """Point links at each move's new heading.

    All moves are matched against the original ``text`` and applied in one
    pass, so a move never rewrites the output of another one.

    Args:
        text: Document content to rewrite.
        old_document: Display name of the document the headings left.
        new_document: Display name of the document the headings joined.
        moves: Confirmed moves; only their heading texts are used here.

    Returns:
        The rewritten text and the number of links replaced.
    """
    replacements: list[tuple[LinkMatch, str]] = []
    for move in moves:
        for match in find_heading_links(text, old_document, move.old_heading):
            replacements.append((match, match.render(new_document, move.new_heading)))

    if not replacements:
        return text, 0

    replacements.sort(key=lambda item: (item[0].start, -item[0].end))
    parts: list[str] = []
    cursor = 0
    count = 0
    for match, replacement in replacements:
        if match.start < cursor:
            continue
        parts.append(text[cursor : match.start])
        parts.append(replacement)
        cursor = match.end
        count += 1
    parts.append(text[cursor:])
    return "".join(parts), count
