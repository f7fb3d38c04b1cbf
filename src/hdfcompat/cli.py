"""
Command-line interface for hdfcompat.

Provides commands for summarizing and exporting InSpec result and profile
files, and for working with NIST SP 800-53 control tags and the control
hierarchy.

Uses Python's argparse module (no external CLI libraries).
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from collections import Counter
from pathlib import Path
from typing import Any, NoReturn

from hdfcompat import __version__
from hdfcompat.compat.status import ControlStatus
from hdfcompat.compat.wrappers import HDFControl, UnrecognizedSchemaError, wrap_control
from hdfcompat.config.settings import (
    DEFAULT_CONFIG_DIR,
    ConfigurationError,
    Settings,
    load_config,
)
from hdfcompat.nist.catalog import get_family_name
from hdfcompat.nist.controls import MalformedNistTagError, parse_nist_strict
from hdfcompat.nist.grouping import status_for_node
from hdfcompat.nist.hierarchy import (
    NistHierarchyNode,
    get_nist_hierarchy,
    get_statistics,
)
from hdfcompat.schema.records import RecordError, load_controls_file

# Set up logging
logger = logging.getLogger(__name__)

# Global verbosity settings (set during main() based on args)
_quiet_mode = False
_verbose_level = 0


def set_output_mode(quiet: bool = False, verbose: int = 0) -> None:
    """
    Set the output mode for the CLI.

    Args:
        quiet: If True, suppress non-essential output.
        verbose: Verbosity level (0=normal, 1+=verbose).
    """
    global _quiet_mode, _verbose_level
    _quiet_mode = quiet
    _verbose_level = verbose


def output(message: str = "", force: bool = False) -> None:
    """
    Print a message to stdout, respecting quiet mode.

    Args:
        message: The message to print.
        force: If True, print even in quiet mode (for essential output like JSON/CSV).
    """
    if force or not _quiet_mode:
        print(message)


def output_verbose(message: str, level: int = 1) -> None:
    """Print a verbose message only if verbosity is high enough."""
    if _verbose_level >= level and not _quiet_mode:
        print(message)


def output_error(message: str) -> None:
    """Print an error message (always shown, even in quiet mode)."""
    print(message, file=sys.stderr)


def format_as_csv(headers: list[str], rows: list[list[Any]]) -> str:
    """
    Format data as CSV string.

    Args:
        headers: Column headers.
        rows: List of row data (each row is a list of values).

    Returns:
        CSV formatted string.
    """
    import csv
    import io

    output = io.StringIO()
    writer = csv.writer(output)
    writer.writerow(headers)
    writer.writerows(rows)
    return output.getvalue()


def create_parser() -> argparse.ArgumentParser:
    """Create and configure the argument parser for hdfcompat CLI."""
    parser = argparse.ArgumentParser(
        prog="hdfcompat",
        description="Normalize InSpec control results and explore NIST 800-53 tags",
    )

    parser.add_argument(
        "--version",
        action="version",
        version=f"hdfcompat {__version__}",
    )

    parser.add_argument(
        "--config",
        metavar="PATH",
        help="Override config file location (default: ~/.hdfcompat/config.yaml)",
    )

    parser.add_argument(
        "-v", "--verbose",
        action="count",
        default=0,
        help="Increase output verbosity (can be repeated)",
    )

    parser.add_argument(
        "-q", "--quiet",
        action="store_true",
        help="Suppress non-essential output",
    )

    subparsers = parser.add_subparsers(dest="command", title="commands")

    # info
    info_parser = subparsers.add_parser(
        "info",
        help="Show version and NIST catalog statistics",
    )
    info_parser.add_argument(
        "--json",
        action="store_true",
        help="Output as JSON",
    )
    info_parser.set_defaults(func=cmd_info)

    # summary
    summary_parser = subparsers.add_parser(
        "summary",
        help="Summarize the controls of a result or profile file",
    )
    summary_parser.add_argument(
        "file",
        metavar="FILE",
        help="InSpec exec or profile JSON file",
    )
    summary_parser.add_argument(
        "--format",
        choices=["table", "json", "csv"],
        help="Output format (default: from config, else table)",
    )
    summary_parser.add_argument(
        "--family",
        metavar="XX",
        help="Only show controls tagged with this NIST family (e.g., AC)",
    )
    summary_parser.set_defaults(func=cmd_summary)

    # export
    export_parser = subparsers.add_parser(
        "export",
        help="Export normalized controls to a JSON file",
    )
    export_parser.add_argument(
        "file",
        metavar="FILE",
        help="InSpec exec or profile JSON file",
    )
    export_parser.add_argument(
        "--output",
        metavar="DIR",
        help="Output directory (default: from config)",
    )
    export_parser.add_argument(
        "--compress",
        action="store_true",
        help="Gzip compress the export",
    )
    export_parser.set_defaults(func=cmd_export)

    # nist
    nist_parser = subparsers.add_parser(
        "nist",
        help="Work with NIST 800-53 control tags",
    )
    nist_subparsers = nist_parser.add_subparsers(dest="nist_command", title="nist commands")

    parse_parser = nist_subparsers.add_parser(
        "parse",
        help="Parse NIST control tags",
    )
    parse_parser.add_argument(
        "tags",
        nargs="+",
        metavar="TAG",
        help='Tag to parse, e.g. "SI-7 (14)(b)"',
    )
    parse_parser.add_argument(
        "--json",
        action="store_true",
        help="Output as JSON",
    )
    parse_parser.set_defaults(func=cmd_nist_parse)

    tree_parser = nist_subparsers.add_parser(
        "tree",
        help="Print the NIST control hierarchy",
    )
    tree_parser.add_argument(
        "--family",
        metavar="XX",
        help="Only print this family",
    )
    tree_parser.add_argument(
        "--depth",
        type=int,
        default=None,
        metavar="N",
        help="Maximum depth to print below each family",
    )
    tree_parser.add_argument(
        "--results",
        metavar="FILE",
        help="Annotate nodes with the group status of controls in this file",
    )
    tree_parser.set_defaults(func=cmd_nist_tree)

    return parser


def setup_logging(verbose: int, quiet: bool, log_level: str | None = None) -> None:
    """
    Configure logging based on verbosity level.

    The configured log_level applies only when neither -q nor -v is given.
    """
    if quiet:
        level = logging.WARNING
    elif verbose >= 1:
        level = logging.DEBUG
    elif log_level:
        level = getattr(logging, log_level, logging.INFO)
    else:
        level = logging.INFO

    logging.basicConfig(
        level=level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )


def _load_settings(args: argparse.Namespace) -> Settings:
    """Load settings honoring the --config option."""
    config_path = Path(args.config) if args.config else None
    return load_config(config_path)


def _load_wrapped_controls(path: str) -> list[HDFControl]:
    """Read a result or profile file and wrap every control in it."""
    records = load_controls_file(Path(path))
    output_verbose(f"Loaded {len(records)} controls from {path}")
    return [wrap_control(r) for r in records]


def cmd_info(args: argparse.Namespace) -> int:
    """Show version and NIST catalog statistics."""
    import platform as platform_module

    info: dict[str, Any] = {
        "version": __version__,
        "python_version": platform_module.python_version(),
        "config_dir": str(DEFAULT_CONFIG_DIR),
        "nist": get_statistics(),
    }

    if args.json:
        output(json.dumps(info, indent=2), force=True)
    else:
        output("hdfcompat System Information")
        output("=" * 60)
        output()
        output(f"Version: {info['version']}")
        output(f"Python: {info['python_version']}")
        output(f"Config directory: {info['config_dir']}")
        output()
        output("NIST Catalog:")
        output(f"  Families: {info['nist']['families']}")
        output(f"  Catalog entries: {info['nist']['catalog_entries']:,}")
        output(f"  Hierarchy nodes: {info['nist']['nodes']:,}")
        output(f"  Leaf controls: {info['nist']['leaves']:,}")

    return 0


def cmd_summary(args: argparse.Namespace) -> int:
    """Summarize the controls of a result or profile file."""
    settings = _load_settings(args)
    output_format = args.format or settings.reporting.format

    controls = _load_wrapped_controls(args.file)

    if args.family:
        family = args.family.upper()
        controls = [
            c for c in controls
            if any(tag.family == family for tag in c.fixed_nist_tags)
        ]

    if output_format == "json":
        result = [c.to_dict(include_finding_details=False) for c in controls]
        output(json.dumps(result, indent=2), force=True)
    elif output_format == "csv":
        headers = ["ID", "Status", "Severity", "NIST Tags"]
        rows = [
            [
                c.id,
                c.status.value,
                c.severity.value,
                " ".join(t.to_string() for t in c.fixed_nist_tags),
            ]
            for c in controls
        ]
        output(format_as_csv(headers, rows), force=True)
    else:
        output()
        output(f"Controls in {args.file}")
        output("=" * 78)
        output(f"{'ID':<24} {'Status':<16} {'Severity':<10} NIST Tags")
        output("-" * 78)
        for c in controls:
            tags = ", ".join(t.to_string() for t in c.fixed_nist_tags)
            output(f"{c.id:<24} {c.status.value:<16} {c.severity.value:<10} {tags}")
        output("-" * 78)
        output()

        counts = Counter(c.status for c in controls)
        output("By Status:")
        for status in ControlStatus:
            if counts.get(status):
                output(f"  {status.value:<16} {counts[status]:>6}")
        output(f"  {'Total':<16} {len(controls):>6}")

    return 0


def cmd_export(args: argparse.Namespace) -> int:
    """Export normalized controls to a JSON file."""
    from hdfcompat.reports import JsonExporter

    settings = _load_settings(args)
    output_dir = Path(args.output or settings.reporting.output_dir).expanduser()

    controls = _load_wrapped_controls(args.file)

    exporter = JsonExporter(
        version=__version__,
        include_finding_details=settings.reporting.include_finding_details,
    )
    result = exporter.export_controls(
        controls,
        output_dir,
        source=args.file,
        compress=args.compress,
    )

    if not result.success:
        output_error(f"Export failed: {result.error}")
        return 1

    output(f"Exported {result.record_count} controls to {result.path}")
    return 0


def cmd_nist_parse(args: argparse.Namespace) -> int:
    """Parse NIST control tags and print their structure."""
    results: list[dict[str, Any]] = []
    failed = 0
    for tag in args.tags:
        try:
            control = parse_nist_strict(tag)
        except MalformedNistTagError as e:
            failed += 1
            results.append({"tag": tag, "error": str(e)})
            continue
        entry = control.to_dict()
        entry["tag"] = tag
        entry["family_name"] = get_family_name(control.family)
        results.append(entry)

    if args.json:
        output(json.dumps(results, indent=2), force=True)
    else:
        for entry in results:
            if "error" in entry:
                output_error(f"{entry['tag']}: {entry['error']}")
                continue
            family_name = entry["family_name"] or "Unknown family"
            output(
                f"{entry['tag']}: {entry['text']} "
                f"(family {entry['family']} - {family_name}; "
                f"sub specs {entry['sub_specs']})"
            )

    return 1 if failed else 0


def _print_tree(
    node: NistHierarchyNode,
    indent: int,
    max_depth: int | None,
    controls: list[HDFControl] | None,
) -> None:
    """Print a hierarchy node and its descendants."""
    label = node.control.to_string()
    family_name = get_family_name(node.control.family)
    if indent == 0 and family_name:
        label = f"{label} - {family_name}"
    if controls is not None:
        label = f"{label} [{status_for_node(node, controls).value}]"
    output(f"{'  ' * indent}{label}")

    if max_depth is not None and indent >= max_depth:
        return
    for child in node.children:
        _print_tree(child, indent + 1, max_depth, controls)


def cmd_nist_tree(args: argparse.Namespace) -> int:
    """Print the NIST control hierarchy."""
    controls = _load_wrapped_controls(args.results) if args.results else None

    roots = get_nist_hierarchy()
    if args.family:
        family = args.family.upper()
        roots = tuple(r for r in roots if r.control.family == family)
        if not roots:
            output_error(f"Unknown NIST family: {args.family}")
            return 1

    for root in roots:
        _print_tree(root, 0, args.depth, controls)

    return 0


def main() -> NoReturn:
    """Main entry point for hdfcompat CLI."""
    parser = create_parser()
    args = parser.parse_args()

    log_level = None
    try:
        log_level = _load_settings(args).log_level
    except ConfigurationError:
        pass  # Reported by the command that needs settings

    # Set up logging and output mode
    setup_logging(args.verbose, args.quiet, log_level)
    set_output_mode(args.quiet, args.verbose)

    if args.command is None or not hasattr(args, "func"):
        parser.print_help()
        sys.exit(0)

    try:
        exit_code = args.func(args)
        sys.exit(exit_code)
    except KeyboardInterrupt:
        output("\nOperation cancelled.")
        sys.exit(130)
    except ConfigurationError as e:
        output_error(f"Configuration error: {e}")
        sys.exit(2)
    except UnrecognizedSchemaError as e:
        output_error(f"Unrecognized file format: {e}")
        sys.exit(2)
    except (RecordError, OSError) as e:
        output_error(f"Cannot read controls: {e}")
        sys.exit(1)
    except Exception as e:
        if args.verbose > 0:
            raise
        output_error(f"Error: {e}")
        logger.exception("Command %s failed", args.command)
        sys.exit(1)


if __name__ == "__main__":
    main()
