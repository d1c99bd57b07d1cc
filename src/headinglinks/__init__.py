"""headinglinks: keep wiki links valid when Markdown headings move."""

from headinglinks.changes import diff_headings, heading_changes
from headinglinks.correlator import CorrelatorState, MoveCorrelator
from headinglinks.exceptions import (
    DocumentError,
    DocumentReadError,
    DocumentWriteError,
    HeadingLinksError,
    HeadingNotFoundError,
)
from headinglinks.headings import extract_headings
from headinglinks.links import find_heading_links, rewrite_heading_links
from headinglinks.rewriter import LinkRewriter
from headinglinks.schemas import ChangeRecord, ConfirmedMove, Correlation, Heading, RewriteReport
from headinglinks.vault import DocumentStore, FileSystemVault
from headinglinks.watcher import HeadingMoveWatcher

__all__ = [
    "ChangeRecord",
    "ConfirmedMove",
    "Correlation",
    "CorrelatorState",
    "DocumentError",
    "DocumentReadError",
    "DocumentStore",
    "DocumentWriteError",
    "FileSystemVault",
    "Heading",
    "HeadingLinksError",
    "HeadingMoveWatcher",
    "HeadingNotFoundError",
    "LinkRewriter",
    "MoveCorrelator",
    "RewriteReport",
    "diff_headings",
    "extract_headings",
    "find_heading_links",
    "heading_changes",
    "rewrite_heading_links",
]
