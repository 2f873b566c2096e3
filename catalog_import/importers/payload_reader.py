# catalog_import/importers/payload_reader.py

import io
import logging
import re
from pathlib import Path
from typing import List, Optional

import pandas as pd
from ftfy import fix_text

from catalog_import.core.config import Config
from catalog_import.core.constants import FileFormat, MediaTypes

logger = logging.getLogger(__name__)

Grid = List[List[str]]

# One layer of quote characters left around a cell after CSV unquoting
_SURROUNDING_QUOTES_RE = r"^\s*[\"']|[\"']\s*$"
_LINE_BREAK_RE = re.compile(r"\r?\n")


def _cell_to_str(value) -> str:
    """Normalize a workbook cell: blanks -> '', 5225.0 -> '5225'."""
    if value is None or pd.isna(value):
        return ""
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value).strip()


class PayloadReader:
    """
    Turn an uploaded catalog payload into tab-joined text lines.
    
    Workbooks and comma-delimited files are read into a rectangular grid
    first; anything else is treated as already tab-delimited text. Reading
    never raises on malformed bytes: an unreadable workbook or CSV falls
    back to plain-text splitting, which may yield no lines at all.
    """
    
    ENCODINGS = ["utf-8-sig", "iso-8859-1"]
    
    @classmethod
    def detect_format(cls, payload: bytes, media_type: str = "", filename: str = "") -> FileFormat:
        """Pick the reader for a payload from its media type, extension and content."""
        media_type = (media_type or "").split(";")[0].strip().lower()
        ext = Path(filename).suffix.lower() if filename else ""
        
        if (
            media_type in MediaTypes.WORKBOOK_TYPES
            or ext in MediaTypes.WORKBOOK_EXTENSIONS
            or payload.startswith(MediaTypes.ZIP_MAGIC)
        ):
            return FileFormat.XLSX
        
        if media_type in MediaTypes.CSV_TYPES or ext in MediaTypes.CSV_EXTENSIONS:
            return FileFormat.CSV
        
        # Untyped content: sniff for commas unless the name says tab-delimited
        untyped = media_type in MediaTypes.UNTYPED and ext not in (".tsv", ".txt")
        if untyped and b"," in payload[:Config.imports.SNIFF_BYTES]:
            return FileFormat.CSV
        
        return FileFormat.TSV
    
    @classmethod
    def to_lines(cls, payload: bytes, media_type: str = "", filename: str = "") -> List[str]:
        """
        Read a payload into tab-joined lines.
        
        Args:
            payload: raw file bytes
            media_type: declared media type (may be empty)
            filename: original file name (may be empty)
        
        Returns:
            Lines with cells joined by tabs; the first line is the header
        """
        payload = payload or b""
        if not payload.strip():
            return []
        
        file_format = cls.detect_format(payload, media_type, filename)
        grid = None
        if file_format == FileFormat.XLSX:
            grid = cls.read_workbook(payload)
        elif file_format == FileFormat.CSV:
            grid = cls.read_delimited(payload)
        
        if grid is not None:
            lines = ["\t".join(row) for row in grid]
            logger.debug(f"Read {len(lines)} {file_format.value} rows from {filename or 'payload'}")
            return lines
        
        lines = cls.read_text(payload)
        logger.debug(f"Read {len(lines)} text lines from {filename or 'payload'}")
        return lines
    
    @classmethod
    def decode(cls, payload: bytes) -> str:
        """Decode bytes with the first encoding that works and repair mojibake."""
        text = None
        for encoding in cls.ENCODINGS:
            try:
                text = payload.decode(encoding)
                break
            except UnicodeDecodeError:
                continue
        if text is None:
            text = payload.decode("utf-8", errors="replace")
        return fix_text(text, uncurl_quotes=False)
    
    @classmethod
    def read_text(cls, payload: bytes) -> List[str]:
        """Split decoded text on line breaks, dropping blank lines."""
        text = cls.decode(payload)
        return [line for line in _LINE_BREAK_RE.split(text) if line.strip()]
    
    @classmethod
    def read_workbook(cls, payload: bytes) -> Optional[Grid]:
        """
        Read the first sheet of a workbook into a grid.
        
        Rows are padded with empty strings to the widest row so every row
        shares one column count.
        """
        try:
            df = pd.read_excel(
                io.BytesIO(payload),
                sheet_name=0,
                header=None,
                engine="openpyxl",
            )
        except Exception as e:
            logger.warning(f"⚠️ Could not read workbook, falling back to text: {e}")
            return None

        return [[_cell_to_str(value) for value in row] for row in df.itertuples(index=False)]
    
    @classmethod
    def read_delimited(cls, payload: bytes) -> Optional[Grid]:
        """
        Read comma-delimited text into a grid.
        
        Delimiters and line breaks inside double quotes are literal. One
        layer of surrounding quote characters is stripped from each cell,
        and rows without any content are dropped (the header is kept).
        """
        text = cls.decode(payload)
        width = Config.imports.MAX_COLUMNS
        too_wide = []
        try:
            df = pd.read_csv(
                io.StringIO(text),
                engine="python",
                sep=",",
                quotechar='"',
                header=None,
                names=list(range(width)),
                dtype=str,
                keep_default_na=False,
                skip_blank_lines=True,
                # Returning None drops the row
                on_bad_lines=lambda fields: too_wide.append(len(fields)),
            )
        except (pd.errors.ParserError, pd.errors.EmptyDataError, ValueError) as e:
            logger.warning(f"⚠️ Could not parse delimited text, falling back to text: {e}")
            return None
        
        if too_wide:
            logger.warning(
                f"⚠️ Skipped {len(too_wide)} rows wider than {width} columns "
                f"(widest {max(too_wide)})"
            )
        
        if df.empty:
            return []
        
        df = df.fillna("")
        for column in df.columns:
            df[column] = (
                df[column]
                .str.strip()
                .str.replace(_SURROUNDING_QUOTES_RE, "", regex=True)
                .str.strip()
            )
        
        # Keep columns up to the last one holding any content
        filled = df != ""
        used_columns = filled.any(axis=0)
        if not used_columns.any():
            return []
        last_column = used_columns[used_columns].index[-1]
        df = df.iloc[:, : last_column + 1]
        
        keep = filled.any(axis=1)
        keep.iloc[0] = True
        df = df[keep]
        
        return [list(row) for row in df.itertuples(index=False)]


def buffer_to_lines(payload: bytes, media_type: str = "", filename: str = "") -> List[str]:
    """Module-level shortcut for ``PayloadReader.to_lines``."""
    return PayloadReader.to_lines(payload, media_type, filename)
