"""Rewrite stale heading links across the whole corpus."""

from __future__ import annotations

import logging
from typing import Sequence

from headinglinks.exceptions import DocumentError
from headinglinks.links import rewrite_heading_links
from headinglinks.schemas import ConfirmedMove, RewriteReport
from headinglinks.vault import DocumentStore

logger = logging.getLogger(__name__)


class LinkRewriter:
    """Apply confirmed moves to every document in a store."""

    def __init__(self, store: DocumentStore) -> None:
        self.store = store

    async def rewrite(
        self,
        old_document: str,
        new_document: str,
        moves: Sequence[ConfirmedMove],
    ) -> RewriteReport:
        """Point every link at ``old_document#old_heading`` to its new target.

        Every document is scanned, including the two involved in the move.
        A document that cannot be read or written is skipped and listed in
        ``failed_documents``; the pass carries on with the rest.

        Args:
            old_document: Id of the document the headings were removed from.
            new_document: Id of the document the headings were added to.
            moves: Confirmed moves to apply.

        Returns:
            Counts of modified documents and replaced links.
        """
        report = RewriteReport()
        if not moves:
            return report

        old_name = self.store.display_name(old_document)
        new_name = self.store.display_name(new_document)

        for document in await self.store.list_documents():
            try:
                text = await self.store.read_document(document)
            except DocumentError as exc:
                logger.warning("Skipping unreadable document %s: %s", document, exc)
                report.failed_documents.append(document)
                continue

            new_text, replaced = rewrite_heading_links(text, old_name, new_name, moves)
            if new_text == text:
                continue

            try:
                await self.store.write_document(document, new_text)
            except DocumentError as exc:
                logger.warning("Could not update links in %s: %s", document, exc)
                report.failed_documents.append(document)
                continue

            report.documents_modified += 1
            report.links_replaced += replaced
            report.modified_documents.append(document)
            logger.debug("Rewrote %d link(s) in %s", replaced, document)

        logger.info(
            "Link rewrite %s -> %s: %d document(s), %d link(s)",
            old_name,
            new_name,
            report.documents_modified,
            report.links_replaced,
        )
        return report
