"""Custom exceptions for headinglinks."""


class HeadingLinksError(Exception):
    """Base exception for headinglinks operations."""


class DocumentError(HeadingLinksError):
    """Error while accessing a document in the store."""

    def __init__(self, document: str, message: str) -> None:
        super().__init__(f"{document}: {message}")
        self.document = document


class DocumentReadError(DocumentError):
    """Document could not be read or decoded."""


class DocumentWriteError(DocumentError):
    """Document could not be overwritten."""


class HeadingNotFoundError(HeadingLinksError):
    """Requested heading does not exist in the document."""
