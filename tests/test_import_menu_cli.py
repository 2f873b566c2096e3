"""
Bulk import command line script.
"""

from __future__ import annotations

import importlib.util
from pathlib import Path

import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker

from catalog_import.models import MenuItem, Restaurant
from tests.builders import LONG_HEADER, long_row, tsv_payload

SCRIPT = Path(__file__).resolve().parent.parent / "scripts" / "import_menu.py"


@pytest.fixture(scope="module")
def cli():
    spec = importlib.util.spec_from_file_location("import_menu", SCRIPT)
    module = importlib.util.module_from_spec(spec)
    spec.loader.exec_module(module)
    return module


@pytest.fixture
def database_url(tmp_path):
    return f"sqlite:///{tmp_path / 'catalog.db'}"


def _write_export(folder: Path, name="products.tsv") -> Path:
    path = folder / name
    path.write_bytes(tsv_payload([
        LONG_HEADER,
        long_row(product_id="P1", restaurant="central-perk", name="Latte", price="4.00",
                 options=[("Milk", "Whole")]),
        long_row(product_id="", restaurant="", name="", price="4.50", options=[("Milk", "Oat")]),
        long_row(product_id="P2", restaurant="graze", name="Brisket", price="20"),
    ]))
    return path


def _query(database_url, model):
    engine = create_engine(database_url)
    try:
        return sessionmaker(bind=engine)().query(model).all()
    finally:
        engine.dispose()


def test_parse_aliases(cli):
    assert cli.parse_aliases(["graze=graze-smokehouse", " a = b "]) == {
        "graze": "graze-smokehouse",
        "a": "b",
    }
    with pytest.raises(Exception):
        cli.parse_aliases(["broken"])


def test_import_folder(cli, tmp_path, database_url, capsys):
    export = _write_export(tmp_path)

    exit_code = cli.main([
        str(tmp_path), "--database-url", database_url, "--alias", "graze=graze-smokehouse",
    ])

    assert exit_code == 0
    out = capsys.readouterr().out
    assert f"{export}: Import complete: 2 created, 0 skipped." in out
    assert "By type: simple 1 | variety 1 | builder 0" in out

    restaurants = {r.id: r.name for r in _query(database_url, Restaurant)}
    assert restaurants == {"central-perk": "Central Perk", "graze-smokehouse": "Graze Smokehouse"}
    assert sorted(item.name for item in _query(database_url, MenuItem)) == ["Brisket", "Latte"]


def test_rerun_and_replace(cli, tmp_path, database_url, capsys):
    export = _write_export(tmp_path)
    cli.main([str(export), "--database-url", database_url])
    capsys.readouterr()

    assert cli.main([str(export), "--database-url", database_url]) == 0
    assert "0 created, 2 skipped." in capsys.readouterr().out

    assert cli.main([str(export), "--replace", "--database-url", database_url]) == 0
    assert "2 created, 0 skipped, 2 replaced." in capsys.readouterr().out
    assert len(_query(database_url, MenuItem)) == 2


def test_missing_file_fails(cli, tmp_path, database_url):
    assert cli.main([str(tmp_path / "missing.tsv"), "--database-url", database_url]) == 1


def test_bad_alias_fails(cli, tmp_path, database_url):
    export = _write_export(tmp_path)
    assert cli.main([str(export), "--alias", "nope", "--database-url", database_url]) == 1
