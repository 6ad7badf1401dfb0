#!/usr/bin/env python3
"""
termpush - export and push project translations

Collects a project's terms and translations for its locales, serializes
them into a localization file format and writes them to stdout, a file,
a local directory or an S3 bucket.

Supported Formats:
    csv, jsonflat, jsonnested, yamlflat, yamlnested, properties, po,
    strings, php, androidxml, resx, xliff12

Commands:
    formats  - List supported formats
    export   - Export one locale of a project
    push     - Export every locale (or one) and push to a sink
    inspect  - Parse an exported file back into terms and translations
    serve    - Run the HTTP API

Example Workflow:
    1. termpush export --catalog catalog.yml --project demo --locale fr --format po
       → Prints the .po file

    2. termpush push --catalog catalog.yml --project demo --format jsonnested \\
           --sink directory --out-dir pushed
       → Returns: one result per locale + summary
"""

import argparse
import json
import sys
from pathlib import Path

from .collector import TermCollector
from .config import settings
from .errors import PushError
from .exporters import ExporterRegistry
from .logging import setup_logging
from .push import PushOrchestrator
from .sink import DirectorySink, build_sink
from .store import CatalogStore


def cmd_formats(args) -> dict:
    """List supported formats."""
    formats = ExporterRegistry.list_formats()
    return {
        "status": "ok",
        "formats": formats,
        "summary": f"{len(formats)} formats supported: {', '.join(f['name'] for f in formats)}",
    }


def cmd_export(args) -> dict:
    """Export one locale to stdout or a file."""
    exporter = ExporterRegistry.get(args.format)
    collector = TermCollector(CatalogStore.load(args.catalog))
    document = collector.collect(
        args.project,
        args.locale,
        untranslated=args.untranslated,
        fallback_locale=args.fallback_locale,
    )
    content = exporter.export(document)

    if not args.output:
        return {"status": "ok", "content": content}

    output_path = Path(args.output)
    output_path.write_text(content, encoding="utf-8")
    return {
        "status": "ok",
        "output_file": str(output_path),
        "locale": document.iso,
        "format": exporter.name,
        "terms": len(document),
        "summary": f"Exported {len(document)} terms for {document.iso} to {output_path}",
    }


def cmd_push(args) -> dict:
    """Push every locale (or one) of a project."""
    if args.sink == "directory":
        sink = DirectorySink(args.out_dir or settings.SINK_DIRECTORY)
    else:
        sink = build_sink(settings, kind=args.sink)

    orchestrator = PushOrchestrator(
        TermCollector(CatalogStore.load(args.catalog)),
        sink=sink,
        max_workers=args.workers,
    )
    summary = orchestrator.push(
        args.project,
        args.format,
        locale=args.locale,
        untranslated=args.untranslated,
        fallback_locale=args.fallback_locale,
    )
    return summary.to_dict()


def cmd_inspect(args) -> dict:
    """Parse an exported file back into the intermediate document."""
    exporter = ExporterRegistry.get(args.format)
    content = Path(args.input).read_text(encoding="utf-8")
    document = exporter.parse(content, iso=args.iso or "")
    return {
        "status": "ok",
        "iso": document.iso,
        "translations": [
            {"term": r.term, "translation": r.translation} for r in document.translations
        ],
        "summary": f"{len(document)} terms parsed from {args.input}",
    }


def cmd_serve(args) -> None:
    """Run the HTTP API with uvicorn."""
    import uvicorn

    uvicorn.run("termpush.api:app", host=args.host, port=args.port)


def _add_collect_arguments(parser: argparse.ArgumentParser, locale_required: bool) -> None:
    parser.add_argument("--catalog", "-c", default=settings.CATALOG_PATH,
                        help=f"Catalog file (default: {settings.CATALOG_PATH})")
    parser.add_argument("--project", "-p", required=True, help="Project id")
    parser.add_argument("--format", "-f", required=True, choices=ExporterRegistry.formats(),
                        help="Export format")
    if locale_required:
        parser.add_argument("--locale", "-l", required=True, help="Locale code")
    else:
        parser.add_argument("--locale", "-l", default="all",
                            help="Locale code, or 'all' for every project locale (default: all)")
    parser.add_argument("--untranslated", "-u", action="store_true",
                        help="Only export untranslated terms")
    parser.add_argument("--fallback-locale", help="Fill untranslated terms from this locale")


def main():
    parser = argparse.ArgumentParser(
        prog="termpush",
        description="termpush - export and push project translations",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # List supported formats
  termpush formats

  # Export French as gettext, filling gaps from English
  termpush export --project demo --locale fr --format po --fallback-locale en

  # Export only untranslated German terms to a file
  termpush export --project demo --locale de --format csv --untranslated -o de.csv

  # Push every locale to ./pushed/site_demo/locale/<iso>
  termpush push --project demo --format jsonnested --sink directory --out-dir pushed

  # Push every locale to the configured S3 bucket
  termpush push --project demo --format androidxml --sink s3

  # Read an exported file back
  termpush inspect --format properties --input fr.properties --iso fr
        """,
    )

    parser.add_argument("--verbose", "-v", action="store_true", help="Log debug output to stderr")
    parser.add_argument("--log-json", action="store_true", help="Write log lines as JSON")

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    subparsers.add_parser("formats", help="List supported formats")

    export_parser = subparsers.add_parser("export", help="Export one locale")
    _add_collect_arguments(export_parser, locale_required=True)
    export_parser.add_argument("--output", "-o", help="Output file (default: stdout)")

    push_parser = subparsers.add_parser("push", help="Export and push project locales")
    _add_collect_arguments(push_parser, locale_required=False)
    push_parser.add_argument("--sink", "-s", default=settings.SINK,
                             choices=["none", "s3", "directory"],
                             help=f"Where to push files (default: {settings.SINK})")
    push_parser.add_argument("--out-dir", help="Target directory for --sink directory")
    push_parser.add_argument("--workers", "-w", type=int, default=settings.PUSH_MAX_WORKERS,
                             help=f"Parallel locale pipelines (default: {settings.PUSH_MAX_WORKERS})")

    inspect_parser = subparsers.add_parser("inspect", help="Parse an exported file")
    inspect_parser.add_argument("--format", "-f", required=True, choices=ExporterRegistry.formats(),
                                help="Format of the input file")
    inspect_parser.add_argument("--input", "-i", required=True, help="Input file")
    inspect_parser.add_argument("--iso", help="Locale code of the file")

    serve_parser = subparsers.add_parser("serve", help="Run the HTTP API")
    serve_parser.add_argument("--host", default=settings.HOST, help=f"Bind host (default: {settings.HOST})")
    serve_parser.add_argument("--port", type=int, default=settings.PORT, help=f"Bind port (default: {settings.PORT})")

    args = parser.parse_args()

    if not args.command:
        parser.print_help()
        sys.exit(1)

    setup_logging(
        level="DEBUG" if args.verbose else None,
        json_logs=True if args.log_json else None,
    )

    try:
        if args.command == "formats":
            result = cmd_formats(args)
            print(json.dumps(result, indent=2))
        elif args.command == "export":
            result = cmd_export(args)
            if "content" in result:
                sys.stdout.write(result["content"])
            else:
                print(json.dumps(result, indent=2))
        elif args.command == "push":
            result = cmd_push(args)
            print(json.dumps(result, indent=2, ensure_ascii=False))
            if result["failed"]:
                sys.exit(1)
        elif args.command == "inspect":
            result = cmd_inspect(args)
            print(json.dumps(result, indent=2, ensure_ascii=False))
        elif args.command == "serve":
            cmd_serve(args)
    except PushError as e:
        print(json.dumps({
            "status": "error",
            "error": e.message,
            "error_type": type(e).__name__,
            "error_code": e.error_code,
            "details": e.details,
        }), file=sys.stderr)
        sys.exit(1)
    except OSError as e:
        print(json.dumps({
            "status": "error",
            "error": str(e),
            "error_type": type(e).__name__,
        }), file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__":
    main()
