"""Document store interface and a file-system backed vault."""

from __future__ import annotations

import asyncio
import logging
from pathlib import Path, PurePosixPath
from typing import Awaitable, Callable, Protocol

from headinglinks.config import HEADINGLINKS_ENCODING, HEADINGLINKS_NOTE_EXTENSION
from headinglinks.exceptions import DocumentReadError, DocumentWriteError
from headinglinks.headings import extract_headings
from headinglinks.schemas import Heading

logger = logging.getLogger(__name__)

ChangeListener = Callable[[str], Awaitable[None]]


class DocumentStore(Protocol):
    """Host services the link repair core relies on.

    Documents are addressed by a stable identifier; ``display_name`` projects
    it to the name used inside wiki links.
    """

    async def read_document(self, document: str) -> str: ...

    async def write_document(self, document: str, text: str) -> None: ...

    async def list_documents(self) -> list[str]: ...

    async def get_prior_heading_snapshot(self, document: str) -> list[Heading]: ...

    def subscribe(self, listener: ChangeListener) -> None: ...

    def unsubscribe(self, listener: ChangeListener) -> None: ...

    def display_name(self, document: str) -> str: ...


class FileSystemVault:
    """A directory of Markdown notes.

    Document ids are POSIX paths relative to ``root``. The vault keeps a
    heading snapshot per document, which listeners see as the state before a
    change; it is refreshed once every listener has handled the change.

    Args:
        root: Vault directory.
        extension: Suffix of the notes to manage.
        encoding: Text encoding used for reads and writes.
    """

    def __init__(
        self,
        root: Path,
        *,
        extension: str = HEADINGLINKS_NOTE_EXTENSION,
        encoding: str = HEADINGLINKS_ENCODING,
    ) -> None:
        self.root = Path(root)
        self.extension = extension
        self.encoding = encoding
        self._listeners: list[ChangeListener] = []
        self._snapshots: dict[str, list[Heading]] = {}

    def path_for(self, document: str) -> Path:
        return self.root / PurePosixPath(document)

    def display_name(self, document: str) -> str:
        return PurePosixPath(document).stem

    async def list_documents(self) -> list[str]:
        paths = await asyncio.to_thread(self._collect_paths)
        return [path.relative_to(self.root).as_posix() for path in paths]

    def _collect_paths(self) -> list[Path]:
        return sorted(path for path in self.root.rglob(f"*{self.extension}") if path.is_file())

    async def read_document(self, document: str) -> str:
        path = self.path_for(document)
        try:
            return await asyncio.to_thread(self._read_text, path)
        except (OSError, UnicodeDecodeError) as exc:
            raise DocumentReadError(document, str(exc)) from exc

    def _read_text(self, path: Path) -> str:
        # newline="" keeps CRLF endings intact through a read/write round.
        with path.open("r", encoding=self.encoding, newline="") as handle:
            return handle.read()

    async def write_document(self, document: str, text: str) -> None:
        """Overwrite a document and announce the change to listeners."""
        path = self.path_for(document)
        try:
            await asyncio.to_thread(path.parent.mkdir, parents=True, exist_ok=True)
            await asyncio.to_thread(path.write_text, text, encoding=self.encoding, newline="")
        except OSError as exc:
            raise DocumentWriteError(document, str(exc)) from exc
        await self.document_changed(document)

    async def index(self) -> int:
        """Snapshot the headings of every document. Returns the count indexed."""
        documents = await self.list_documents()
        for document in documents:
            await self._refresh_snapshot(document)
        logger.debug("Indexed %d documents under %s", len(documents), self.root)
        return len(documents)

    async def get_prior_heading_snapshot(self, document: str) -> list[Heading]:
        return list(self._snapshots.get(document, []))

    async def document_changed(self, document: str) -> None:
        """Notify listeners that ``document`` changed, then refresh its snapshot.

        Call this for edits made outside :meth:`write_document`.
        """
        for listener in list(self._listeners):
            await listener(document)
        await self._refresh_snapshot(document)

    async def _refresh_snapshot(self, document: str) -> None:
        try:
            text = await self.read_document(document)
        except DocumentReadError as exc:
            logger.warning("Could not snapshot headings of %s: %s", document, exc)
            self._snapshots.pop(document, None)
            return
        self._snapshots[document] = extract_headings(text, document)

    def subscribe(self, listener: ChangeListener) -> None:
        if listener not in self._listeners:
            self._listeners.append(listener)

    def unsubscribe(self, listener: ChangeListener) -> None:
        if listener in self._listeners:
            self._listeners.remove(listener)
