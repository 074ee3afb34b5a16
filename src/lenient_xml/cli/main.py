"""Main CLI entry point for the lenient-xml command-line tool.

Provides ``parse`` (dump trees and warnings) and ``check`` (report warnings,
non-zero exit on any problem) over one or more files.
"""

import argparse
import json
import sys
from pathlib import Path
from typing import Any, Dict, List, Optional

from lenient_xml import __version__
from lenient_xml.api import LenientXMLParser
from lenient_xml.shared import (
    ConfigError,
    LenientXMLError,
    MarkupSyntaxError,
    ParserConfig,
    configure_logging,
    get_logger,
)


class FileProcessor:
    """Parses files for CLI commands and collects per-file reports."""

    def __init__(self, config: ParserConfig, encoding: str = "utf-8"):
        self.config = config
        self.encoding = encoding
        self.parser = LenientXMLParser(config)
        self.logger = get_logger(__name__, None, "cli_processor")

    def process_file(self, path: Path, include_tree: bool = False) -> Dict[str, Any]:
        """Parse one file and return a JSON-friendly report."""
        report: Dict[str, Any] = {"file": str(path)}
        try:
            result = self.parser.parse_file(path, self.encoding)
        except MarkupSyntaxError as e:
            report.update({
                "success": False,
                "error": e.message,
                "line": e.line,
                "column": e.column,
                "excerpt": e.render(),
            })
            return report
        except (OSError, UnicodeDecodeError) as e:
            self.logger.warning("Could not read file", extra={"file": str(path)})
            report.update({"success": False, "error": str(e)})
            return report
        except LenientXMLError as e:
            report.update({"success": False, "error": str(e)})
            return report

        report.update({
            "success": True,
            "element_count": result.element_count,
            "warnings": [warning.to_dict() for warning in result.warnings],
        })
        if include_tree:
            report["tree"] = result.root.to_dict()
        return report


def render_tree(root: Dict[str, Any]) -> List[str]:
    """Render a ``to_dict`` tree as indented outline lines."""
    lines: List[str] = []
    pending = [(child, 0) for child in reversed(root.get("children", []))]
    while pending:
        node, depth = pending.pop()
        indent = "  " * depth
        if node["type"] == "element":
            attrs = "".join(
                f" {key}" if attr["value"] is True else f' {key}="{attr["value"]}"'
                for key, attr in node.get("attrs", {}).items()
            )
            lines.append(f"{indent}<{node.get('name', '')}{attrs}>")
            pending.extend((child, depth + 1) for child in reversed(node["children"]))
        elif node["type"] == "comment":
            lines.append(f"{indent}<!--{node['value']}-->")
        else:
            lines.append(f"{indent}{node['value']!r}")
    return lines


def format_reports(reports: List[Dict[str, Any]], format_type: str) -> str:
    """Format per-file reports for output."""
    if format_type == "json":
        return json.dumps(reports, indent=2)

    lines: List[str] = []
    for report in reports:
        if not report["success"]:
            lines.append(f"✗ {report['file']}: {report['error']}")
            if "excerpt" in report:
                lines.extend(f"   {line}" for line in report["excerpt"].splitlines())
            continue

        warnings = report["warnings"]
        status = "✓" if not warnings else "!"
        lines.append(f"{status} {report['file']} ({report['element_count']} elements, "
                     f"{len(warnings)} warnings)")
        for warning in warnings:
            lines.append(f"   {report['file']}:{warning['line']}:{warning['column']}: "
                         f"{warning['message']}")
        if "tree" in report:
            lines.extend(f"   {line}" for line in render_tree(report["tree"]))
    return "\n".join(lines)


def load_config(args: argparse.Namespace) -> ParserConfig:
    config = ParserConfig()
    if getattr(args, "config", None):
        config = ParserConfig.from_file(args.config)
    if getattr(args, "strict", False):
        config = config.override(strict_close_tags=True)
    return config


def create_argument_parser() -> argparse.ArgumentParser:
    """Create the main argument parser."""
    parser = argparse.ArgumentParser(
        prog="lenient-xml",
        description="Lenient XML/HTML-like markup parser with positional warnings"
    )
    parser.add_argument("--version", action="version", version=__version__)
    parser.add_argument("--verbose", "-v", action="store_true", help="Verbose output")
    parser.add_argument("--quiet", "-q", action="store_true", help="Quiet output")

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    common = argparse.ArgumentParser(add_help=False)
    common.add_argument("paths", nargs="+", type=Path, help="Files to parse")
    common.add_argument(
        "--format", "-f",
        choices=["json", "text"],
        default="text",
        help="Output format (default: text)"
    )
    common.add_argument(
        "--strict",
        action="store_true",
        help="Treat mismatched close tags as fatal"
    )
    common.add_argument("--config", "-c", type=Path, help="JSON configuration file")
    common.add_argument("--encoding", default="utf-8", help="File encoding (default: utf-8)")

    parse_parser = subparsers.add_parser(
        "parse", parents=[common], help="Print trees and warnings"
    )
    parse_parser.add_argument(
        "--output", "-o",
        type=Path,
        help="Output file (default: stdout)"
    )

    subparsers.add_parser(
        "check", parents=[common], help="Report warnings; exit 1 if any file has problems"
    )
    return parser


def cmd_parse(args: argparse.Namespace, config: ParserConfig) -> int:
    """Handle parse command."""
    processor = FileProcessor(config, args.encoding)
    reports = [processor.process_file(path, include_tree=True) for path in args.paths]
    output = format_reports(reports, args.format)

    if args.output:
        try:
            args.output.write_text(output, encoding="utf-8")
        except OSError as e:
            print(f"Error writing output: {e}", file=sys.stderr)
            return 1
        print(f"Results written to {args.output}", file=sys.stderr)
    else:
        print(output)

    return 0 if all(report["success"] for report in reports) else 1


def cmd_check(args: argparse.Namespace, config: ParserConfig) -> int:
    """Handle check command."""
    processor = FileProcessor(config, args.encoding)
    reports = [processor.process_file(path) for path in args.paths]
    print(format_reports(reports, args.format))

    clean = sum(1 for r in reports if r["success"] and not r["warnings"])
    if args.format == "text":
        print(f"Checked {len(reports)} files, {clean} clean", file=sys.stderr)
    return 0 if clean == len(reports) else 1


def main(argv: Optional[List[str]] = None) -> int:
    """Main CLI entry point."""
    parser = create_argument_parser()
    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        return 1

    try:
        config = load_config(args)
    except ConfigError as e:
        print(f"Configuration error: {e}", file=sys.stderr)
        return 2

    if args.verbose:
        configure_logging("DEBUG")
    elif args.quiet:
        configure_logging("ERROR")
    else:
        configure_logging(config.logging_level)

    try:
        if args.command == "parse":
            return cmd_parse(args, config)
        if args.command == "check":
            return cmd_check(args, config)
        print(f"Unknown command: {args.command}", file=sys.stderr)
        return 1
    except KeyboardInterrupt:
        print("\nOperation interrupted by user", file=sys.stderr)
        return 130


if __name__ == "__main__":
    sys.exit(main())
