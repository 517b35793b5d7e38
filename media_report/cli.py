"""CLI entry point for the media report tools.

Loads a report record exported from the backend and runs the report
pipeline: summary values, contents listing, PPTX export, and QA
validation of an exported deck.

Usage::

    # Show the "Report Data" summary for a report
    python -m media_report.cli summary --report data/report.json

    # Per-media breakdown of volume / reach / AVE
    python -m media_report.cli summary --report data/report.json --breakdown

    # List the contents page with page numbers
    python -m media_report.cli contents --report data/report.json

    # Export the report as a PowerPoint deck
    python -m media_report.cli export \\
        --report data/report.json \\
        --organization data/org.json \\
        --output output/report.pptx

    # Validate an existing deck against its report
    python -m media_report.cli validate \\
        --report data/report.json \\
        --pptx output/report.pptx

    # Write the default deck configuration for editing
    python -m media_report.cli init-config --output config/deck.yaml
"""

import argparse
import json
import sys
from pathlib import Path

from media_report.generator.deck_builder import DeckBuilder
from media_report.processor.pagination import pager_window
from media_report.processor.tables import media_breakdown
from media_report.processor.view import ReportView
from media_report.qa.validator import DeckValidator
from media_report.schema.design_system import format_number
from media_report.schema.loader import (
    load_config,
    load_organization,
    load_report,
    save_config,
)
from media_report.schema.models import DeckConfig


# ---------------------------------------------------------------------------
# Loading
# ---------------------------------------------------------------------------

def _load_config(args) -> DeckConfig:
    """Load a DeckConfig from --config, or the built-in defaults."""
    path = getattr(args, "config", None)
    if not path:
        return DeckConfig()
    path = Path(path)
    if not path.exists():
        _error(f"Config file not found: {path}")
    return load_config(path)


def _load_view(args, config: DeckConfig) -> ReportView:
    """Build a ReportView from --report / --organization."""
    try:
        report = load_report(args.report)
        organization = None
        if getattr(args, "organization", None):
            organization = load_organization(args.organization)
    except (FileNotFoundError, ValueError) as exc:
        # json.JSONDecodeError is a ValueError
        _error(str(exc))

    view = ReportView(
        report,
        organization,
        module_labels=config.module_labels,
        media_type_labels=config.media_type_labels,
    )
    for w in view.warnings:
        _warn(w)
    return view


# ---------------------------------------------------------------------------
# Commands
# ---------------------------------------------------------------------------

def cmd_summary(args):
    """Print the report data summary."""
    config = _load_config(args)
    view = _load_view(args, config)

    if args.json:
        print(json.dumps(view.to_dict(), indent=2, ensure_ascii=False))
        return

    s = view.summary
    print(f"Report:      {view.title}")
    print(f"Prepared for {view.cover.organization_name} ({view.cover.report_date})")
    print()
    print(f"Volume:      {s.volume}")
    print(f"Reach:       {s.reach}")
    print(f"AVE:         {s.ave}")
    print(f"Regions:     {s.region}")
    print(f"Language:    {s.language}")
    print(f"Time Period: {s.time_period}")

    if args.breakdown:
        df = media_breakdown(view.report, config.media_type_labels)
        print()
        print(df.to_string(formatters={
            "volume": format_number,
            "reach": format_number,
            "ave": format_number,
        }))


def cmd_contents(args):
    """Print the contents listing with page numbers."""
    config = _load_config(args)
    view = _load_view(args, config)

    print(f"Pages:       {view.total_pages}")
    print()
    n = 0
    for row in view.contents.executive:
        n += 1
        print(f"  {n:2d}. {row.label:<40} {row.page:>3}")
    for section in view.contents.sections:
        print(f"  {section.label}")
        for row in section.rows:
            n += 1
            print(f"  {n:2d}. {row.label:<40} {row.page:>3}")

    if args.page is not None:
        page = view.page(args.page)
        current = args.page if 1 <= args.page <= view.total_pages else None
        name = page if isinstance(page, str) else f"{page.media_type}:{page.module}"
        print()
        print(f"Page {args.page}: {name}")
        if current is not None:
            pager = " ".join(str(p) for p in pager_window(current, view.total_pages))
            print(f"Pager:       {pager}")


def cmd_export(args):
    """Export the report as a PPTX deck."""
    config = _load_config(args)
    view = _load_view(args, config)
    _info(f"Report: {view.title} ({view.total_pages} pages)")

    _info("Building PPTX...")
    pptx_bytes = DeckBuilder(config).build(view)

    if not args.skip_qa:
        _info("Running QA validation...")
        qa_result = DeckValidator(view).validate(pptx_bytes)
        if qa_result.passed:
            _info(qa_result.summary())
        else:
            _warn(qa_result.summary())
            if args.verbose:
                print(qa_result.report(), file=sys.stderr)
            if not args.force:
                _error("QA validation failed. Use --force to write anyway, "
                       "or --skip-qa to skip validation.")
    else:
        _info("QA validation skipped (--skip-qa)")

    output = Path(args.output)
    output.parent.mkdir(parents=True, exist_ok=True)
    output.write_bytes(pptx_bytes)
    _info(f"Written: {output} ({len(pptx_bytes):,} bytes)")


def cmd_validate(args):
    """Validate an existing PPTX against its report."""
    config = _load_config(args)
    view = _load_view(args, config)
    pptx_path = Path(args.pptx)
    if not pptx_path.exists():
        _error(f"PPTX file not found: {pptx_path}")

    _info(f"Validating {pptx_path} against {view.title}")
    qa_result = DeckValidator(view).validate(pptx_path.read_bytes())
    print(qa_result.report())
    sys.exit(0 if qa_result.passed else 1)


def cmd_init_config(args):
    """Write the default deck configuration as YAML."""
    output = Path(args.output)
    if output.exists() and not args.force:
        _error(f"{output} already exists. Use --force to overwrite.")
    save_config(DeckConfig(), output)
    _info(f"Written: {output}")


# ---------------------------------------------------------------------------
# Output helpers
# ---------------------------------------------------------------------------

def _info(msg):
    print(f"  {msg}", file=sys.stderr)


def _warn(msg):
    print(f"  WARNING: {msg}", file=sys.stderr)


def _error(msg):
    print(f"  ERROR: {msg}", file=sys.stderr)
    sys.exit(1)


# ---------------------------------------------------------------------------
# Argument parsing
# ---------------------------------------------------------------------------

def build_parser():
    """Build the argument parser."""
    parser = argparse.ArgumentParser(
        prog="media-report",
        description="Summarize, index and export media monitoring reports.",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    # ---- summary ----
    summ = subparsers.add_parser(
        "summary",
        help="Show volume, reach, region, language and time period.",
    )
    _add_report_args(summ)
    summ.add_argument(
        "--breakdown",
        action="store_true",
        default=False,
        help="Also show totals per media type.",
    )
    summ.add_argument(
        "--json",
        action="store_true",
        default=False,
        help="Print the full report view as JSON.",
    )
    summ.set_defaults(func=cmd_summary)

    # ---- contents ----
    cont = subparsers.add_parser(
        "contents",
        help="List the contents page with page numbers.",
    )
    _add_report_args(cont)
    cont.add_argument(
        "--page",
        type=int,
        default=None,
        help="Also show what is on this page and the pager around it.",
    )
    cont.set_defaults(func=cmd_contents)

    # ---- export ----
    exp = subparsers.add_parser(
        "export",
        help="Export the report as a PPTX deck.",
    )
    _add_report_args(exp)
    exp.add_argument(
        "-o", "--output",
        required=True,
        help="Output PPTX file path.",
    )
    exp.add_argument(
        "--skip-qa",
        action="store_true",
        default=False,
        help="Skip QA validation after export.",
    )
    exp.add_argument(
        "--force",
        action="store_true",
        default=False,
        help="Write output even if QA validation fails.",
    )
    exp.add_argument(
        "-v", "--verbose",
        action="store_true",
        default=False,
        help="Show detailed output (full QA report on failure).",
    )
    exp.set_defaults(func=cmd_export)

    # ---- validate ----
    val = subparsers.add_parser(
        "validate",
        help="Validate an existing PPTX against its report.",
    )
    _add_report_args(val)
    val.add_argument(
        "--pptx",
        required=True,
        help="Path to the PPTX file to validate.",
    )
    val.set_defaults(func=cmd_validate)

    # ---- init-config ----
    init = subparsers.add_parser(
        "init-config",
        help="Write the default deck configuration (YAML).",
    )
    init.add_argument(
        "-o", "--output",
        required=True,
        help="Output YAML file path.",
    )
    init.add_argument(
        "--force",
        action="store_true",
        default=False,
        help="Overwrite an existing file.",
    )
    init.set_defaults(func=cmd_init_config)

    return parser


def _add_report_args(parser):
    """Add --report / --organization / --config args to a subparser."""
    parser.add_argument(
        "--report",
        required=True,
        help="Report record (.json or .yaml).",
    )
    parser.add_argument(
        "--organization",
        help="Organization record (.json or .yaml) for cover branding.",
    )
    parser.add_argument(
        "--config",
        help="Deck configuration YAML (design and label overrides).",
    )


# ---------------------------------------------------------------------------
# Main
# ---------------------------------------------------------------------------

def main(argv=None):
    """CLI entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)
    args.func(args)


if __name__ == "__main__":
    main()
