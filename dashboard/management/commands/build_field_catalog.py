"""Print the field catalog for a business record file."""

from __future__ import annotations

import json
from pathlib import Path

from django.core.management.base import BaseCommand, CommandError

from dashboard.record import get_business_record, load_record_file
from fields.catalog import build_catalog
from fields.compatibility import KIND_VALUE_TYPES, filter_for


class Command(BaseCommand):
    """Build and print the catalog of addressable fields."""

    help = "Print the field catalog for a JSON/YAML business record (default: the configured record)."

    def add_arguments(self, parser) -> None:
        """Add command arguments."""

        parser.add_argument(
            "--input",
            default=None,
            help="Path to a .json/.yaml record file (default: WIDGETBOARD_RECORD_PATH or the sample record).",
        )
        parser.add_argument(
            "--kind",
            default=None,
            choices=sorted(KIND_VALUE_TYPES),
            help="Only print fields compatible with this widget kind.",
        )
        parser.add_argument(
            "--json",
            action="store_true",
            help="Print the catalog as JSON instead of aligned text.",
        )

    def handle(self, *args, **options) -> str | None:
        """Run the command."""

        input_path: str | None = options["input"]
        kind: str | None = options["kind"]

        if input_path:
            try:
                record = load_record_file(Path(input_path))
            except (OSError, ValueError) as exc:
                raise CommandError(f"Could not load {input_path!r}: {exc}") from exc
        else:
            record = get_business_record()

        catalog = build_catalog(record)
        if kind:
            catalog = filter_for(catalog, kind)

        if options["json"]:
            self.stdout.write(json.dumps([field.as_json() for field in catalog], indent=2))
            return None

        width = max((len(field.path) for field in catalog), default=0)
        for field in catalog:
            fmt = f" ({field.format})" if field.format else ""
            self.stdout.write(f"{field.path.ljust(width)}  {field.value_type}{fmt}  {field.label}")
        self.stdout.write(f"{len(catalog)} fields")
        return None
