"""Command-line interface for rendering tables to PDF."""

import argparse
import csv
import json
import logging
from pathlib import Path
from typing import Any, List, Optional, Sequence, Tuple
import yaml

from reportlab.lib.pagesizes import A4, LETTER

from .config import TableConfig, load_config
from .errors import TableLayoutError
from .layout_engine import TableResult, draw_table
from .reportlab_backend import ReportLabDocument
from .sample_data import generate_sample_table

PAGE_SIZES = {
    "A4": A4,
    "LETTER": LETTER,
}


def load_table(path: Path) -> Tuple[List[str], List[List[Any]]]:
    """Load headers and rows from a CSV, JSON or YAML file.

    CSV: the first row holds the headers. JSON/YAML: a mapping with
    ``headers`` and ``rows``, where a cell is a string or a styled mapping.
    """
    suffix = path.suffix.lower()
    if suffix not in (".csv", ".json", ".yaml", ".yml"):
        raise ValueError(f"Unsupported table file type: {path.suffix or path.name}")

    if suffix == ".csv":
        with open(path, "r", newline="") as f:
            records = list(csv.reader(f))
        if not records:
            return [], []
        return records[0], records[1:]

    with open(path, "r") as f:
        data = json.load(f) if suffix == ".json" else yaml.safe_load(f)

    if not isinstance(data, dict):
        raise ValueError(f"{path} must contain a mapping with 'headers' and 'rows'")
    return list(data.get("headers") or []), list(data.get("rows") or [])


def render_table(
    headers: Sequence[str],
    rows: Sequence[Sequence[Any]],
    config: TableConfig,
    out_path: Path,
    pagesize=A4,
    orientation: str = "portrait",
) -> Tuple[ReportLabDocument, TableResult]:
    """Render one table into a new PDF at out_path."""
    document = ReportLabDocument(pagesize=pagesize, orientation=orientation)
    page = document.add_page()
    result = draw_table(page, headers, rows, config)
    out_path.parent.mkdir(parents=True, exist_ok=True)
    document.save(out_path)
    return document, result


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point for CLI."""
    parser = argparse.ArgumentParser(
        description="Render a paginated table to PDF",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )

    parser.add_argument(
        "--config",
        type=Path,
        help="Path to YAML table configuration file",
    )
    source = parser.add_mutually_exclusive_group(required=True)
    source.add_argument(
        "--input",
        type=Path,
        help="CSV, JSON or YAML file holding the table",
    )
    source.add_argument(
        "--sample-rows",
        type=int,
        help="Render this many rows of synthetic data instead of a file",
    )
    parser.add_argument(
        "--seed",
        type=int,
        default=42,
        help="Random seed for synthetic data",
    )
    parser.add_argument(
        "--out",
        type=Path,
        default=Path("table.pdf"),
        help="Output PDF path",
    )
    parser.add_argument(
        "--page-size",
        choices=sorted(PAGE_SIZES),
        default="A4",
        help="Page size",
    )
    parser.add_argument(
        "--landscape",
        action="store_true",
        help="Use landscape orientation",
    )
    parser.add_argument(
        "--layout-json",
        type=Path,
        help="Write row and cell placements to this JSON file",
    )
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Log layout decisions",
    )

    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    try:
        config = load_config(args.config)
        if args.input:
            headers, rows = load_table(args.input)
        else:
            headers, rows = generate_sample_table(args.sample_rows, seed=args.seed)

        document, result = render_table(
            headers,
            rows,
            config,
            args.out,
            pagesize=PAGE_SIZES[args.page_size],
            orientation="landscape" if args.landscape else "portrait",
        )
    except (TableLayoutError, ValueError, yaml.YAMLError) as e:
        print(f"Error: {e}")
        return 1

    if args.layout_json:
        with open(args.layout_json, "w") as f:
            json.dump(result.to_dict(), f, indent=2)

    print(f"Rendered {len(rows)} rows to {args.out}")
    print(f"  Pages: {document.page_count}")
    print(f"  Table ends at y={result.end_y:.2f} on page {result.page_count}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
