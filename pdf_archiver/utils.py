"""Utility functions for the PDF archiver."""

import mimetypes
from pathlib import Path

PDF_MIME_TYPE = "application/pdf"
PDF_SIGNATURE = b"%PDF-"
PDF_MARKER = "pdf"


def split_path(path: str) -> tuple[str, ...]:
    """Split a backend path into its segments.

    Empty and ``.`` segments are dropped, so leading slashes and ``./``
    prefixes never make it through.

    Raises:
        ValueError: If the path tries to climb above the backend root.

    """
    parts = tuple(
        part for part in path.replace("\\", "/").split("/") if part not in ("", ".")
    )
    if ".." in parts:
        error_msg = f"Path must stay inside the backend root: {path}"
        raise ValueError(error_msg)
    return parts


def normalize_remote_path(local_path: str) -> str:
    """Rewrite a local PDF path into its remote destination.

    Every ``pdf`` substring is removed from the directory portion, then the
    base name is appended as is. No separator is reinserted: the one that
    preceded the stripped ``pdf`` segment is what separates the two halves.

    >>> normalize_remote_path("a/pdf/report.pdf")
    'a/report.pdf'
    """
    directory, _, basename = local_path.rpartition("/")
    return directory.replace(PDF_MARKER, "") + basename


def is_pdf(mimetype: str | None) -> bool:
    """Exact, case-sensitive comparison with the PDF mime type."""
    return mimetype == PDF_MIME_TYPE


def guess_mimetype(path: Path) -> str | None:
    """Guess the mime type of a file on disk.

    The content signature wins over the file name, so a PDF saved without
    its extension is still reported as one.
    """
    with path.open("rb") as f:
        head = f.read(len(PDF_SIGNATURE))
    if head == PDF_SIGNATURE:
        return PDF_MIME_TYPE

    mimetype, _ = mimetypes.guess_type(path.name)
    return mimetype


def to_bytes(content: str | bytes | bytearray | memoryview) -> bytes:
    if isinstance(content, bytes):
        return content
    if isinstance(content, str):
        return content.encode("utf-8")
    return bytes(content)
