#!/usr/bin/env python3
"""
Export a loaded catalog as JSON, YAML or a browsable HTML page.
"""

import html
import json
from pathlib import Path
from typing import Any, Optional, Union

try:
    import yaml
    YAML_AVAILABLE = True
except ImportError:
    YAML_AVAILABLE = False

from .lookup import LookupTable
from .mo_format import ErrorCode
from .reader import MoFileReader


DEFAULT_CSS = """
body {
    background-color: black;
    color: silver;
}
table {
    width: 80%;
}
th {
    background-color: orange;
    color: black;
}
hr {
    color: red;
    width: 80%;
    size: 5px;
}
a:link {
    color: gold;
}
a:visited {
    color: grey;
}
a:hover {
    color: blue;
}
.copyleft {
    font-size: 12px;
    text-align: center;
}
"""


def catalog_to_dict(table: LookupTable) -> dict[str, Any]:
    """Plain-data view of a table, suitable for JSON/YAML serialization."""
    return {
        "entry_count": table.entry_count,
        "metadata": table.metadata(),
        "messages": {k: v for k, v in table.flat.items() if k != ""},
        "contexts": {ctx: dict(inner) for ctx, inner in table.contextual.items()},
    }


def export_json(table: LookupTable, indent: int = 2) -> str:
    return json.dumps(catalog_to_dict(table), indent=indent, ensure_ascii=False)


def export_yaml(table: LookupTable) -> str:
    if not YAML_AVAILABLE:
        raise ImportError("PyYAML is required for YAML export. Install with: pip install pyyaml")
    return yaml.safe_dump(
        catalog_to_dict(table),
        allow_unicode=True,
        default_flow_style=False,
        sort_keys=False,
    )


def _html_table(title: str, rows: list[tuple[str, str]]) -> list[str]:
    lines = [f'<table border="1"><th colspan="2">{html.escape(title)}</th>']
    for left, right in rows:
        lines.append(f"<tr><td>{html.escape(left)}</td><td>{html.escape(right)}</td></tr>")
    lines.append("</table><br/>")
    return lines


def render_html(table: LookupTable, title: str, css: str = DEFAULT_CSS) -> str:
    """Render the catalog as a standalone HTML page."""
    lines = [
        '<!DOCTYPE HTML PUBLIC "-//W3C//DTD HTML 4.01 Transitional//EN" '
        '"http://www.w3.org/TR/html4/loose.dtd">',
        '<html><head><style type="text/css">',
        css,
        "</style>",
        '<meta http-equiv="content-type" content="text/html; charset=utf-8">',
        f"<title>Dump of {html.escape(title)}</title></head>",
        "<body>",
        "<center>",
        f"<h1>{html.escape(title)}</h1>",
    ]
    lines.extend(_html_table("Project Info", list(table.metadata().items())))
    lines.append("<hr noshade/>")

    # Empty msgid is the project header shown above
    content = [(k, v) for k, v in table.flat.items() if k]
    lines.extend(_html_table("Content", content))

    for context, inner in table.contextual.items():
        lines.extend(_html_table(context, list(inner.items())))

    lines.extend([
        "</center>",
        '<div class="copyleft">File generated by mo-reader</div>',
        "</body></html>",
    ])
    return "\n".join(lines) + "\n"


def export_html(
    source: Union[MoFileReader, str, Path],
    filename: Optional[Union[str, Path]] = None,
    css: str = DEFAULT_CSS,
    encoding: str = "utf-8",
    strict_offsets: bool = False,
    title: Optional[str] = None,
) -> ErrorCode:
    """
    Write a catalog out as HTML.

    Args:
        source: A loaded MoFileReader, or the path of a .mo file to read
        filename: Output path; defaults to the input path with ".html" appended.
            Required when `source` is a reader.
        css: Stylesheet embedded in the page
        encoding: Codec for catalog strings when reading a path
        strict_offsets: Passed to the reader when reading a path
        title: Page heading; defaults to the input file name

    Returns:
        SUCCESS, TABLE_EMPTY if the catalog has no flat entries,
        or the error code of the failed load
    """
    if isinstance(source, MoFileReader):
        if not filename:
            raise ValueError("An output filename is required when exporting a reader")
        reader = source
        output = Path(filename)
        title = title or output.stem
    else:
        reader = MoFileReader(encoding=encoding, strict_offsets=strict_offsets)
        result = reader.read_file(source)
        if result is not ErrorCode.SUCCESS:
            return result
        output = Path(filename) if filename else Path(f"{source}.html")
        title = title or Path(source).name

    if not reader.table.flat:
        return ErrorCode.TABLE_EMPTY

    try:
        output.write_text(render_html(reader.table, title, css), encoding="utf-8")
    except OSError:
        return ErrorCode.FILE_NOT_FOUND
    return ErrorCode.SUCCESS
