import argparse
import logging
import sys
from typing import List, Optional

from accessibility_checker.config import Configuration
from accessibility_checker.controllers.audit_controller import AuditController
from accessibility_checker.errors import ConfigurationError
from accessibility_checker.managers.report_manager import ReportManager
from accessibility_checker.model import AuditSummary
from accessibility_checker.utils.configure_logging import configure_logger

logger = logging.getLogger(__name__)

audit_help_text = """
  a11y-audit <path> [<path> ...] [--config <file>] [-o <report.json>] [--csv <file>]
                      Audits HTML files (directories are searched recursively)
                      and prints a summary per accessibility category.
""".strip()


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="a11y-audit",
        description="Check HTML documents for accessibility defects.",
        epilog=audit_help_text,
        formatter_class=argparse.RawDescriptionHelpFormatter
    )
    parser.add_argument("paths", nargs="+", help="HTML files or directories to audit.")
    parser.add_argument("--config", "-c", help="Rule configuration JSON (defaults to the bundled settings.json).")
    parser.add_argument("--output", "-o", help="Write the JSON report to this file.")
    parser.add_argument("--csv", help="Export all diagnostics to this CSV file.")
    parser.add_argument("--workers", "-w", type=int, default=1, help="Number of worker processes.")
    parser.add_argument("--log-level", default="WARNING", help="Logging level (DEBUG, INFO, WARNING, ...).")
    parser.add_argument("--no-progress", action="store_true", help="Hide the progress bar.")
    return parser


def print_summary(summary: AuditSummary) -> None:
    for result in summary.results:
        for d in result.diagnostics:
            start = d.range.start
            code = d.code or "-"
            print(f"{result.path}:{start.line + 1}:{start.character + 1}: {d.severity.value} [{code}] {d.message}")

    overall = summary.overall
    print()
    print(f"Documents audited: {len(summary.results)}")
    if summary.failed:
        print(f"Documents failed:  {len(summary.failed)}")
    print(f"Diagnostics:       {summary.total_diagnostics} ({overall.total} by success criterion, {overall.uncoded} without)")
    for name, count in overall.category_breakdown().items():
        print(f"  {name:<15} {count}")
    for code, count in zip(overall.guidelines, overall.amount):
        print(f"  {code:<15} {count}")


def main(argv: Optional[List[str]] = None) -> int:
    """
    Entry point for the `a11y-audit` command.

    Returns:
        0 when no diagnostics were found, 1 when there were findings,
        2 on configuration or usage errors.
    """
    parser = build_parser()
    args = parser.parse_args(argv)

    configure_logger(args.log_level)

    try:
        config = Configuration.load(args.config)
        controller = AuditController(config)
    except ConfigurationError as e:
        logger.error(f"Configuration error: {e}")
        print(f"Configuration error: {e}", file=sys.stderr)
        return 2

    summary = controller.run_audit(args.paths, workers=args.workers, show_progress=not args.no_progress)

    print_summary(summary)

    report_manager = ReportManager()
    if args.output:
        report_manager.save_report(summary, args.output)
    if args.csv:
        report_manager.export_csv(summary, args.csv)

    return 1 if summary.total_diagnostics else 0
