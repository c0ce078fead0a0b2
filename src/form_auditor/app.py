from __future__ import annotations

import argparse
import json
import logging
import sys
import time

from pydantic import ValidationError
from tqdm.auto import tqdm

from form_auditor.dom.builder import DOMBuilder
from form_auditor.dom.engine import CheckEngine
from form_auditor.dom.registry import CheckRegistry
from form_auditor.errors import MissingFileError
from form_auditor.expectations import FormExpectations
from form_auditor.managers.config_manager import config_manager
from form_auditor.managers.report_manager import ReportManager
from form_auditor.model import AuditReport, ERROR, FAIL
from form_auditor.utils.configure_logging import configure_logger
from form_auditor.utils.path_utils import PathUtils

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_FAILED = 1
EXIT_UNUSABLE = 2

STATUS_ICONS = {FAIL: "❌", ERROR: "💥"}


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="form-audit", description="Check an HTML form document against its checklist.")
    parser.add_argument("--log-level", default=None, help="Root log level (default: debug.level from settings).")
    subparsers = parser.add_subparsers(dest="subcommand")

    run_parser = subparsers.add_parser("run", help="Run every check against a document")
    run_parser.add_argument("path", nargs="?", default=None, help="HTML document (default: document.path from settings).")
    run_parser.add_argument("--export", "-o", type=str, default=None, help="Write results to .csv, .json or .xlsx.")
    run_parser.add_argument("--no-progress", action="store_true", help="Disable the progress bar.")
    _add_settings_arguments(run_parser)

    config_parser = subparsers.add_parser("config", help="Show the effective configuration as JSON")
    _add_settings_arguments(config_parser)

    subparsers.add_parser("codes", help="List every registered check code")
    return parser


def _add_settings_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("--settings", type=str, default=None, help="JSON settings file replacing the bundled one.")
    parser.add_argument(
        "--set", dest="overrides", action="append", default=[], metavar="KEY=VALUE",
        help="Override one setting for this run, e.g. form.min_tabindexes=5 (repeatable)."
    )


def main(argv: list[str] | None = None) -> int:
    """Entrypoint for the form-audit command."""
    parser = build_parser()
    try:
        parsed_args = parser.parse_args(argv)
    except SystemExit as e:
        return EXIT_OK if e.code == 0 else EXIT_UNUSABLE

    configure_logger(parsed_args.log_level or config_manager.get_nested("debug.level", "WARNING"))

    if parsed_args.subcommand == "run":
        return _handle_run(parsed_args)
    if parsed_args.subcommand == "config":
        return _handle_config(parsed_args)
    if parsed_args.subcommand == "codes":
        return _handle_codes()

    parser.print_help()
    return EXIT_OK


def _handle_codes() -> int:
    CheckRegistry.discover()
    for definition in CheckRegistry.get_definitions():
        print(f"\n{definition.group} ({definition.scope}) - {definition.description}")
        for check in definition.checks:
            print(f"  {check.defined_code:<22} {check.title}")
    print(f"\n{len(CheckRegistry.get_all_possible_codes())} check codes registered.")
    return EXIT_OK


def _handle_config(parsed_args: argparse.Namespace) -> int:
    if not _apply_settings(parsed_args):
        return EXIT_UNUSABLE
    print(json.dumps(config_manager.get_all(), indent=2))
    return EXIT_OK


def _apply_settings(parsed_args: argparse.Namespace) -> bool:
    """Loads --settings, then applies each --set override on top. Returns False on bad input."""
    if parsed_args.settings:
        try:
            config_manager.load_file(parsed_args.settings)
        except (OSError, json.JSONDecodeError) as e:
            print(f"❌ Could not load settings from {parsed_args.settings}: {e}")
            return False

    for override in parsed_args.overrides:
        key_path, sep, value = override.partition("=")
        if not sep or not key_path.strip():
            print(f"❌ Invalid override '{override}', expected KEY=VALUE")
            return False
        if not config_manager.set_nested(key_path.strip(), value):
            print(f"❌ Error: Failed to set config value for key '{key_path.strip()}'.")
            return False
    return True


def _handle_run(parsed_args: argparse.Namespace) -> int:
    if not _apply_settings(parsed_args):
        return EXIT_UNUSABLE

    try:
        expectations = FormExpectations.from_config(config_manager.get_nested("form"))
    except ValidationError as e:
        print(f"❌ Invalid 'form' settings:\n{e}")
        return EXIT_UNUSABLE

    doc_path = PathUtils.resolve_document(parsed_args.path or config_manager.get_nested("document.path", "index.html"))

    try:
        doc = DOMBuilder().load_doc(doc_path)
    except MissingFileError as e:
        print(f"❌ {e}")
        return EXIT_UNUSABLE

    engine = CheckEngine()

    def progress(checks):
        return tqdm(checks, desc="Checking", unit="check", leave=False, disable=parsed_args.no_progress)

    start = time.perf_counter()
    report = engine.run_audit(doc, expectations, progress=progress)
    duration = time.perf_counter() - start

    _print_results(report)
    _print_summary(report, duration)

    if parsed_args.export:
        try:
            out_path = ReportManager().export(report, parsed_args.export)
            print(f"✅ Report exported to: {out_path}")
        except (ValueError, OSError) as e:
            print(f"❌ Export failed: {e}")
            return EXIT_UNUSABLE

    return EXIT_OK if report.passed else EXIT_FAILED


def _print_results(report: AuditReport) -> None:
    current_group = None
    for r in report.results:
        if r.group != current_group:
            current_group = r.group
            print(f"\n{current_group}")
        icon = STATUS_ICONS.get(r.status, "✅")
        print(f"  {icon} {r.check_id:<32} {r.title}")
        if r.message:
            print(f"       {r.message}")


def _print_summary(report: AuditReport, duration: float) -> None:
    counts = report.counts()

    print("\n" + "=" * 60)
    print("📊 FORM AUDIT SUMMARY")
    print("=" * 60)
    print(f"Document:        {report.source}")
    print(f"Checks Run:      {report.total}")
    print(f"Passed:          {counts['PASS']}")
    print(f"Failed:          {counts['FAIL']}")
    print(f"Errors:          {counts['ERROR']}")
    print(f"Duration:        {duration * 1000:.2f}ms")
    print("-" * 60)
    print("✅ All checks passed" if report.passed else "❌ Document does not conform")
    print("=" * 60 + "\n")


if __name__ == "__main__":
    sys.exit(main())
