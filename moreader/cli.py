#!/usr/bin/env python3
"""
mo-reader - inspect gettext .mo catalogs from the command line

Commands:
    info    - Header summary, entry count and project metadata
    lookup  - Translate one id, optionally within a context
    dump    - Export the catalog as JSON, YAML or HTML

Examples:
    mo-reader info --file languages/nl.mo
    mo-reader lookup --file languages/nl.mo --id "String English One"
    mo-reader lookup --file languages/nl.mo --context "TEST|String|1" --id "String English"
    mo-reader dump --file languages/nl.mo --format yaml
"""

import argparse
import json
import sys
from pathlib import Path

from .export import export_html, export_json, export_yaml
from .mo_format import ErrorCode, MoFileError
from .reader import MoFileReader


def _load(args) -> MoFileReader:
    """Load --file into a fresh reader, raising on failure."""
    reader = MoFileReader(encoding=args.encoding, strict_offsets=args.strict_offsets)
    result = reader.read_file(args.file)
    if result is not ErrorCode.SUCCESS:
        raise reader.last_error()
    return reader


def cmd_info(args) -> dict:
    """Summarise a catalog."""
    reader = _load(args)
    header = reader.header

    return {
        "status": "ok",
        "file": str(args.file),
        "header": {
            "magic_number": f"0x{header.magic_number:08X}",
            "file_format_version": header.file_format_version,
            "string_count": header.string_count,
            "original_table_offset": header.original_table_offset,
            "translation_table_offset": header.translation_table_offset,
            "hash_table_size": header.hash_table_size,
            "hash_table_offset": header.hash_table_offset,
        },
        "entry_count": reader.entry_count(),
        "contexts": sorted(reader.table.contextual),
        "metadata": reader.metadata(),
    }


def cmd_lookup(args) -> dict:
    """Translate a single id."""
    reader = _load(args)
    if args.context is not None:
        translation = reader.lookup_with_context(args.context, args.id)
    else:
        translation = reader.lookup(args.id)

    return {
        "status": "ok",
        "id": args.id,
        "context": args.context,
        "translation": translation,
        "found": translation != args.id,
    }


def cmd_dump(args) -> str:
    """Export the catalog."""
    reader = _load(args)

    if args.format == "html":
        output = args.output or f"{args.file}.html"
        result = export_html(reader, output, title=Path(args.file).name)
        if result is not ErrorCode.SUCCESS:
            raise MoFileError(f"HTML export to {output} failed: {result.value}", code=result)
        return json.dumps({"status": "ok", "output": str(output)}, indent=2)

    if args.format == "yaml":
        text = export_yaml(reader.table)
    else:
        text = export_json(reader.table)

    if args.output:
        Path(args.output).write_text(text, encoding="utf-8")
        return json.dumps({"status": "ok", "output": args.output}, indent=2)
    return text


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="mo-reader",
        description="mo-reader - gettext .mo catalog inspector",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  mo-reader info --file languages/nl.mo
  mo-reader lookup --file languages/nl.mo --id "String English One"
  mo-reader lookup --file languages/nl.mo --context "TEST|String|1" --id "String English"
  mo-reader dump --file languages/nl.mo --format html --output nl.html
        """,
    )

    common = argparse.ArgumentParser(add_help=False)
    common.add_argument("--file", "-f", required=True, help="Path to .mo catalog")
    common.add_argument("--encoding", "-e", default="utf-8", help="String encoding (default: utf-8)")
    common.add_argument("--strict-offsets", action="store_true",
                        help="Require descriptor tables at the offsets declared in the header")

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    subparsers.add_parser("info", parents=[common], help="Show header and metadata")

    lookup_parser = subparsers.add_parser("lookup", parents=[common], help="Translate one id")
    lookup_parser.add_argument("--id", "-i", required=True, help="Original string to translate")
    lookup_parser.add_argument("--context", "-c", help="Message context (msgctxt)")

    dump_parser = subparsers.add_parser("dump", parents=[common], help="Export catalog")
    dump_parser.add_argument("--format", default="json", choices=["json", "yaml", "html"],
                             help="Output format (default: json)")
    dump_parser.add_argument("--output", "-o", help="Output file (default: stdout; <file>.html for html)")

    return parser


def main(argv=None):
    parser = build_parser()
    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        sys.exit(1)

    try:
        if args.command == "info":
            print(json.dumps(cmd_info(args), indent=2, ensure_ascii=False))
        elif args.command == "lookup":
            print(json.dumps(cmd_lookup(args), indent=2, ensure_ascii=False))
        elif args.command == "dump":
            print(cmd_dump(args))
    except MoFileError as e:
        print(json.dumps(e.to_dict()), file=sys.stderr)
        sys.exit(1)
    except Exception as e:
        print(json.dumps({
            "status": "error",
            "error": str(e),
            "error_type": type(e).__name__,
        }), file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__":
    main()
