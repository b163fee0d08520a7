#!/usr/bin/env python3
"""Validate a saved widget layout against a business record.

This is a developer-facing gate script. It loads a layout snapshot (as
produced by the layout save endpoint) and reports widget errors and warnings
against the record's field catalog.
"""

from __future__ import annotations

import argparse
import json
import os
from pathlib import Path

import django


def main() -> int:
    """Run the layout validator and print a JSON report."""

    parser = argparse.ArgumentParser(description="Validate a saved widget layout.")
    parser.add_argument("layout", help="Path to a layout snapshot JSON file.")
    parser.add_argument("--record", default=None, help="Path to a JSON/YAML business record (default: sample).")
    args = parser.parse_args()

    os.environ.setdefault("DJANGO_SETTINGS_MODULE", "widgetboard.settings")
    django.setup()

    from dashboard.record import get_business_record, load_record_file
    from dashboard.widgets.snapshot_codec import decode_collection
    from dashboard.widgets.validator import validate_collection
    from fields.catalog import build_catalog

    layout = decode_collection(json.loads(Path(args.layout).read_text(encoding="utf-8")))
    record = load_record_file(Path(args.record)) if args.record else get_business_record()
    result = validate_collection(layout, catalog=build_catalog(record))

    report = {
        "widgets": len(layout),
        "is_valid": result.is_valid,
        "errors": list(result.errors),
        "warnings": list(result.warnings),
    }
    print(json.dumps(report, indent=2, sort_keys=True))

    if not result.is_valid:
        return 2
    if result.warnings:
        return 1
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
