"""
Text, price and upload helpers.
"""

from __future__ import annotations

import io
from decimal import Decimal

import pytest
from werkzeug.datastructures import FileStorage

from catalog_import.core.exceptions import (
    ConfigurationError,
    FileTooLargeError,
    InvalidFileFormatError,
    InvalidConfigError,
)
from catalog_import.core.config import ImportConfig
from catalog_import.core.utils import (
    cell,
    humanize_slug,
    parse_price,
    payload_from_upload,
    read_import_file,
    strip_html,
)


@pytest.mark.parametrize("text, expected", [
    ("3.50", Decimal("3.50")),
    ("  -2 USD", Decimal("-2")),
    (".5", Decimal("0.5")),
    ("4.25abc", Decimal("4.25")),
    ("1e3", Decimal("1000")),
    ("$3", None),
    ("", None),
    (None, None),
])
def test_parse_price(text, expected):
    assert parse_price(text) == expected


def test_strip_html():
    assert strip_html("<p>Fish&amp;chips</p><p>&lt;hot&gt;</p>") == "Fish&chips <hot>"
    assert strip_html("  a\n\n b  ") == "a b"
    assert strip_html("caf&eacute;") == "caf&eacute;"
    assert strip_html(None) == ""


def test_cell():
    parts = [" a ", "", None]
    assert cell(parts, 0) == "a"
    assert cell(parts, 2) == ""
    assert cell(parts, 10) == ""


@pytest.mark.parametrize("slug, expected", [
    ("central-perk", "Central Perk"),
    ("graze_SMOKEHOUSE", "Graze Smokehouse"),
    ("cafe", "Cafe"),
    ("", ""),
])
def test_humanize_slug(slug, expected):
    assert humanize_slug(slug) == expected


# ---------------------------------------------------------------------------
# Uploads
# ---------------------------------------------------------------------------
def _upload(data=b"Name,Price\n", filename="menu.csv", content_type="text/csv"):
    return FileStorage(stream=io.BytesIO(data), filename=filename, content_type=content_type)


def test_payload_from_upload():
    payload, media_type, filename = payload_from_upload(_upload(filename="../menu.csv"))
    assert payload == b"Name,Price\n"
    assert media_type == "text/csv"
    assert filename == "menu.csv"


def test_upload_without_file():
    with pytest.raises(InvalidFileFormatError):
        payload_from_upload(_upload(filename=""))
    with pytest.raises(InvalidFileFormatError):
        payload_from_upload(None)


def test_upload_with_unsupported_extension():
    with pytest.raises(InvalidFileFormatError) as excinfo:
        payload_from_upload(_upload(filename="menu.pdf"))
    assert "csv" in excinfo.value.to_dict()["details"]["allowed"]


def test_upload_too_large():
    with pytest.raises(FileTooLargeError) as excinfo:
        payload_from_upload(_upload(data=b"x" * 10), max_size=5)
    assert excinfo.value.details == {"size": 10, "max_size": 5}


def test_read_import_file_size_limit(tmp_path):
    path = tmp_path / "menu.tsv"
    path.write_bytes(b"abcdef")
    assert read_import_file(path) == b"abcdef"
    with pytest.raises(FileTooLargeError):
        read_import_file(path, max_size=3)


def test_import_config_validation(monkeypatch):
    ImportConfig.validate()
    monkeypatch.setattr(ImportConfig, "SNIFF_BYTES", 0)
    with pytest.raises(InvalidConfigError) as excinfo:
        ImportConfig.validate()
    assert isinstance(excinfo.value, ConfigurationError)
    assert excinfo.value.to_dict()["error"] == "InvalidConfigError"
