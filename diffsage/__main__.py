#!/usr/bin/env python3
"""CLI entry point for diffsage.

Usage:
    python -m diffsage <command> [options]

Commands:
    analyze     Classify the changes between two versions of a text
    categories  List the change categories
"""

from __future__ import annotations

import argparse
import sys
from pathlib import Path

from diffsage.commands.analyze import cmd_analyze
from diffsage.commands.categories import cmd_categories
from diffsage.domain.text_source import TextSource
from diffsage.services.report_generator import ReportFormat


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(
        prog="diffsage",
        description="Semantic change classification for source files",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Commands:
  analyze     Classify the changes between two versions of a text
  categories  List the change categories

Examples:
  python -m diffsage analyze old/app.js new/app.js
  python -m diffsage analyze HEAD~1:src/app.js HEAD:src/app.js --source git --format markdown
  python -m diffsage analyze main:src/app.js feature:src/app.js --source github --repo owner/name
  python -m diffsage analyze a.py b.py --format json --output-dir out/ --config diffsage.yaml
        """,
    )
    subparsers = parser.add_subparsers(dest="command", help="Command to run")

    # analyze command
    parser_analyze = subparsers.add_parser(
        "analyze",
        help="Classify the changes between two versions of a text",
    )
    parser_analyze.add_argument(
        "source_locator",
        metavar="SOURCE",
        help="Original text: a path, or REV:path for git/github sources",
    )
    parser_analyze.add_argument(
        "changed_locator",
        metavar="CHANGED",
        help="Changed text: a path, or REV:path for git/github sources",
    )
    parser_analyze.add_argument(
        "--source",
        choices=[s.value for s in TextSource],
        default=TextSource.FILE.value,
        help="Where both texts are read from (default: file)",
    )
    parser_analyze.add_argument(
        "--repo",
        help="GitHub repository in owner/name format (required for --source github)",
    )
    parser_analyze.add_argument(
        "--repo-path",
        default=".",
        help="Path to local git repository for --source git (default: current directory)",
    )
    parser_analyze.add_argument(
        "--format",
        choices=[f.value for f in ReportFormat],
        default=ReportFormat.TEXT.value,
        help="Report format printed to stdout (default: text)",
    )
    parser_analyze.add_argument(
        "--output-dir",
        type=Path,
        help="Write changes.json and changes.md to this directory",
    )
    parser_analyze.add_argument(
        "--config",
        help="YAML file with analyzer settings",
    )
    parser_analyze.add_argument(
        "--write-job-summary",
        action="store_true",
        help="Write the report to GITHUB_STEP_SUMMARY and counts to GITHUB_OUTPUT",
    )

    # categories command
    subparsers.add_parser(
        "categories",
        help="List the change categories",
    )

    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        return 1

    # Route to command implementations with explicit parameters
    if args.command == "analyze":
        return cmd_analyze(
            source_locator=args.source_locator,
            changed_locator=args.changed_locator,
            source=TextSource.from_string(args.source),
            repo=args.repo,
            repo_path=args.repo_path,
            report_format=ReportFormat.from_string(args.format),
            output_dir=args.output_dir,
            config_path=args.config,
            write_job_summary=args.write_job_summary,
        )

    elif args.command == "categories":
        return cmd_categories()

    else:
        parser.print_help()
        return 1


if __name__ == "__main__":
    sys.exit(main())
