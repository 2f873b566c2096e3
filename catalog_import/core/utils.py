# catalog_import/core/utils.py

"""
Utility functions used across the application.

Provides helpers for text cleanup, price parsing and upload handling.
"""

import re
from decimal import Decimal, InvalidOperation
from pathlib import Path
from typing import Optional, Tuple
from werkzeug.utils import secure_filename
from werkzeug.datastructures import FileStorage

from .config import Config
from .exceptions import InvalidFileFormatError, FileTooLargeError, FileReadError

_TAG_RE = re.compile(r"<[^>]*>")
_WHITESPACE_RE = re.compile(r"\s+")

# Leading numeric prefix, e.g. "3.50", "-2", ".5", "1e3" (trailing junk ignored)
_PRICE_PREFIX_RE = re.compile(r"^\s*([+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?)")


def strip_html(text: Optional[str]) -> str:
    """
    Remove tag markup and decode &amp; &lt; &gt;, collapsing whitespace.
    
    Other entities are left as-is.
    """
    if not text:
        return ""
    text = _TAG_RE.sub(" ", text)
    text = text.replace("&amp;", "&").replace("&lt;", "<").replace("&gt;", ">")
    return _WHITESPACE_RE.sub(" ", text).strip()


def parse_price(text: Optional[str]) -> Optional[Decimal]:
    """
    Parse the leading number of a price cell.
    
    Returns None when the cell does not start with a number.
    """
    if text is None:
        return None
    match = _PRICE_PREFIX_RE.match(str(text))
    if not match:
        return None
    try:
        return Decimal(match.group(1))
    except InvalidOperation:
        return None


def cell(parts, index: int) -> str:
    """Stripped cell at ``index`` or an empty string past the row end."""
    if index < len(parts):
        return (parts[index] or "").strip()
    return ""


def humanize_slug(slug: Optional[str]) -> str:
    """'central-perk_cafe' -> 'Central Perk Cafe'."""
    words = re.split(r"[-_]", slug or "")
    return " ".join(w[:1].upper() + w[1:].lower() for w in words)


class FileValidator:
    """Validates uploaded catalog files."""
    
    ALLOWED_EXTENSIONS = Config.app.ALLOWED_EXTENSIONS
    
    @classmethod
    def is_allowed_file(cls, filename: str) -> bool:
        """
        Check if file extension is allowed.
        
        Args:
            filename: Name of the file
            
        Returns:
            True if file type is allowed
        """
        return '.' in filename and \
               filename.rsplit('.', 1)[1].lower() in cls.ALLOWED_EXTENSIONS
    
    @classmethod
    def validate_size(cls, size: int, max_size: int = None):
        limit = max_size or Config.app.MAX_CONTENT_LENGTH
        if size > limit:
            raise FileTooLargeError(
                f"File exceeds maximum size of {limit} bytes",
                details={"size": size, "max_size": limit}
            )


def payload_from_upload(upload: FileStorage, max_size: int = None) -> Tuple[bytes, str, str]:
    """
    Read an uploaded file into ``(payload, media_type, filename)``.
    
    Raises:
        InvalidFileFormatError: missing name or disallowed extension
        FileTooLargeError: payload over the configured limit
        FileReadError: the upload stream could not be read
    """
    if upload is None or not upload.filename:
        raise InvalidFileFormatError("No file uploaded")
    
    filename = secure_filename(upload.filename)
    if not FileValidator.is_allowed_file(filename):
        raise InvalidFileFormatError(
            f"Unsupported file type: {upload.filename}",
            details={"allowed": sorted(FileValidator.ALLOWED_EXTENSIONS)}
        )
    
    try:
        payload = upload.read()
    except OSError as e:
        raise FileReadError(f"Could not read upload {filename}: {e}") from e
    
    FileValidator.validate_size(len(payload), max_size)
    return payload, upload.mimetype or "", filename


def read_import_file(path: Path, max_size: int = None) -> bytes:
    """Read a catalog file from disk, enforcing the size limit."""
    try:
        payload = Path(path).read_bytes()
    except OSError as e:
        raise FileReadError(f"Could not read {path}: {e}") from e
    FileValidator.validate_size(len(payload), max_size)
    return payload
