#!/usr/bin/env python3
"""
Tests for catalog export: dict/JSON/YAML dumps and HTML pages.
"""

import io
import json

import pytest

from moreader.export import (
    catalog_to_dict,
    export_html,
    export_json,
    export_yaml,
    render_html,
)
from moreader.lookup import parse_and_build
from moreader.mo_format import ErrorCode
from moreader.reader import MoFileReader


@pytest.fixture
def table(nl_bytes):
    return parse_and_build(io.BytesIO(nl_bytes))


def test_catalog_to_dict(table):
    data = catalog_to_dict(table)
    assert data["entry_count"] == 7
    assert "" not in data["messages"]
    assert data["messages"]["String English One"] == "Text Nederlands Een"
    assert data["contexts"]["TEST|String|2"] == {"String English": "Text Nederlands Twee"}
    assert data["metadata"]["Language"] == "nl"


def test_export_json(table):
    data = json.loads(export_json(table))
    assert data["messages"]["String English Three"] == "Text Nederlands Drie"


def test_export_yaml(table):
    yaml = pytest.importorskip("yaml")
    data = yaml.safe_load(export_yaml(table))
    assert data == catalog_to_dict(table)


def test_render_html_sections(table):
    page = render_html(table, "nl.mo")
    assert "<title>Dump of nl.mo</title>" in page
    assert '<th colspan="2">Project Info</th>' in page
    assert "<tr><td>Language</td><td>nl</td></tr>" in page
    assert "<tr><td>String English One</td><td>Text Nederlands Een</td></tr>" in page
    for n in (1, 2, 3):
        assert f'<th colspan="2">TEST|String|{n}</th>' in page


def test_render_html_escapes_markup(make_mo):
    table = parse_and_build(io.BytesIO(make_mo([("<b>Bold</b>", "<b>Vet</b>")])))
    page = render_html(table, "markup.mo")
    assert "&lt;b&gt;Bold&lt;/b&gt;" in page
    assert "<b>Vet</b>" not in page


def test_export_html_default_path(nl_mo):
    assert export_html(nl_mo) is ErrorCode.SUCCESS
    output = nl_mo.parent / "nl.mo.html"
    assert output.exists()
    assert "Text Nederlands Twee" in output.read_text(encoding="utf-8")


def test_export_html_explicit_path(nl_mo, tmp_path):
    target = tmp_path / "out.html"
    assert export_html(nl_mo, target, css="body { color: red; }") is ErrorCode.SUCCESS
    assert "body { color: red; }" in target.read_text(encoding="utf-8")


def test_export_html_empty_table(tmp_path, make_mo):
    """Catalogs with only contextual entries have nothing for the content table."""
    path = tmp_path / "ctx.mo"
    path.write_bytes(make_mo([("menu\x04Open", "Openen")]))
    assert export_html(path) is ErrorCode.TABLE_EMPTY


def test_export_html_missing_file(tmp_path):
    assert export_html(tmp_path / "missing.mo") is ErrorCode.FILE_NOT_FOUND


def test_export_html_from_reader(nl_mo, tmp_path):
    """An already loaded reader can be exported without re-reading the file."""
    reader = MoFileReader()
    reader.read_file(nl_mo)
    target = tmp_path / "page.html"

    assert export_html(reader, target, title="Dutch") is ErrorCode.SUCCESS
    page = target.read_text(encoding="utf-8")
    assert "<title>Dump of Dutch</title>" in page
    assert "Text Nederlands Een" in page


def test_export_html_reader_needs_filename(nl_mo):
    reader = MoFileReader()
    reader.read_file(nl_mo)
    with pytest.raises(ValueError):
        export_html(reader)


def test_export_html_empty_reader(tmp_path):
    assert export_html(MoFileReader(), tmp_path / "empty.html") is ErrorCode.TABLE_EMPTY


def test_export_html_strict_offsets(tmp_path, make_mo):
    data = bytearray(make_mo([("Hello", "Hallo")]))
    data[12:16] = (64).to_bytes(4, "little")
    path = tmp_path / "moved.mo"
    path.write_bytes(bytes(data))

    assert export_html(path) is ErrorCode.SUCCESS
    assert export_html(path, strict_offsets=True) is ErrorCode.MALFORMED_STREAM
