"""Error taxonomy for doc-library.

Every failure the service reports to a client is a ``DocLibraryError``
subclass. Each carries a machine-checkable ``kind``, the HTTP status it maps
to, and a human-readable message.
"""

from __future__ import annotations


class DocLibraryError(Exception):
    """Base exception for all doc-library errors."""

    kind: str = "doc_library_error"
    status_code: int = 500

    def __init__(self, message: str | None = None) -> None:
        self.message = message or self.__class__.__doc__ or self.kind
        super().__init__(self.message)

    def to_dict(self) -> dict[str, str]:
        return {"message": self.message, "kind": self.kind}


class ValidationError(DocLibraryError):
    """Malformed or missing input."""

    kind = "validation_error"
    status_code = 400


class DuplicateEmail(DocLibraryError):
    """User with this email already exists"""

    kind = "duplicate_email"
    status_code = 400


class UnsupportedFileType(DocLibraryError):
    """Only PDF files are allowed"""

    kind = "unsupported_file_type"
    status_code = 400


class FileTooLarge(DocLibraryError):
    """File exceeds the maximum upload size"""

    kind = "file_too_large"
    status_code = 400


class NotFound(DocLibraryError):
    """Not found"""

    kind = "not_found"
    status_code = 404


class FileMissing(DocLibraryError):
    """File not found on disk"""

    kind = "file_missing"
    status_code = 404


class StorageIOError(DocLibraryError):
    """Storage backend failed to read or write a file"""

    kind = "storage_io_error"
    status_code = 500


__all__ = [
    "DocLibraryError",
    "ValidationError",
    "DuplicateEmail",
    "UnsupportedFileType",
    "FileTooLarge",
    "NotFound",
    "FileMissing",
    "StorageIOError",
]
