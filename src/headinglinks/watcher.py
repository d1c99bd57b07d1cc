"""Drive heading move detection from document change notifications."""

from __future__ import annotations

import logging
from pathlib import PurePosixPath
from typing import Callable

from headinglinks.config import HEADINGLINKS_NOTE_EXTENSION
from headinglinks.correlator import MoveCorrelator
from headinglinks.exceptions import DocumentReadError
from headinglinks.headings import extract_headings
from headinglinks.rewriter import LinkRewriter
from headinglinks.schemas import Correlation, Heading, RewriteReport
from headinglinks.vault import DocumentStore

logger = logging.getLogger(__name__)

Notifier = Callable[[str], None]


class HeadingMoveWatcher:
    """Listen to a document store and repair links after heading moves.

    Rewriting links writes documents, and every write is itself a change
    notification. While a rewrite pass runs, incoming notifications are
    deferred together with the snapshot they were raised against. When the
    pass ends, those for documents the pass wrote are dropped and the rest are
    processed in arrival order.

    Args:
        store: Document store to watch and rewrite.
        correlator: Move correlator; a fresh one is created when omitted.
        rewriter: Link rewriter; defaults to one bound to ``store``.
        notify: Called with a summary after each rewrite pass.
        extension: Only documents with this suffix are considered.
    """

    def __init__(
        self,
        store: DocumentStore,
        *,
        correlator: MoveCorrelator | None = None,
        rewriter: LinkRewriter | None = None,
        notify: Notifier | None = None,
        extension: str = HEADINGLINKS_NOTE_EXTENSION,
    ) -> None:
        self.store = store
        self.correlator = correlator or MoveCorrelator()
        self.rewriter = rewriter or LinkRewriter(store)
        self.notify = notify or _log_notice
        self.extension = extension
        self.reports: list[RewriteReport] = []
        self._rewriting = False
        self._deferred: list[tuple[str, list[Heading]]] = []

    @property
    def rewrite_in_progress(self) -> bool:
        return self._rewriting

    def start(self) -> None:
        self.store.subscribe(self.handle_change)

    def stop(self) -> None:
        self.store.unsubscribe(self.handle_change)

    async def handle_change(self, document: str) -> None:
        """Entry point for a single change notification."""
        if PurePosixPath(document).suffix != self.extension:
            return

        before = await self.store.get_prior_heading_snapshot(document)
        if self._rewriting:
            self._deferred.append((document, before))
            logger.debug("Deferred change to %s during rewrite", document)
            return

        await self._process(document, before)

    async def _process(self, document: str, before: list[Heading]) -> None:
        try:
            text = await self.store.read_document(document)
        except DocumentReadError as exc:
            logger.warning("Ignoring change to unreadable document %s: %s", document, exc)
            return

        after = extract_headings(text, document)
        correlation = self.correlator.observe(document, before, after)
        if correlation is not None:
            await self._rewrite(correlation)

    async def _rewrite(self, correlation: Correlation) -> None:
        self._rewriting = True
        try:
            report = await self.rewriter.rewrite(
                correlation.old_document, correlation.new_document, correlation.moves
            )
        except Exception:
            # Snapshots captured during a failed pass are stale; never replay them.
            dropped, self._deferred = self._deferred, []
            logger.warning("Rewrite pass failed; dropped %d deferred change(s)", len(dropped))
            raise
        finally:
            self._rewriting = False

        self.reports.append(report)
        self.notify(report.summary())
        await self._drain(set(report.modified_documents))

    async def _drain(self, written: set[str]) -> None:
        pending, self._deferred = self._deferred, []
        for document, before in pending:
            if document in written:
                continue
            await self._process(document, before)


def _log_notice(message: str) -> None:
    logger.info(message)
