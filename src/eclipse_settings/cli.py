#!/usr/bin/env python3
"""
Eclipse Settings CLI

Command-line shell around the settings importer. All prompting lives here.
"""

import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional

from common.exceptions import SettingsError, WorkspaceSelectionError
from common.logging_config import setup_logging
from .config import DEFAULT_CONFIG_PATH, ImporterConfig, load_config
from .epf_converter import REASON_METADATA
from .importer import ImportPlan, SettingsImporter
from .source_inspector import SourceFormat

logger = logging.getLogger(__name__)

DEFAULT_SOURCE_DIR = "eclipse-settings"

EXIT_OK = 0
EXIT_FAILED = 1
EXIT_USAGE = 2


def prompt_workspace(candidates: List[Path]) -> int:
    """Ask which workspace to use. Returns a zero-based index."""
    print("Multiple Eclipse workspaces found:\n")
    for number, path in enumerate(candidates, start=1):
        print(f"  {number}. {path}")
    print()
    try:
        response = input(f"Select workspace [1-{len(candidates)}]: ").strip()
        return int(response) - 1
    except (ValueError, EOFError):
        return -1


def prompt_confirm(plan: ImportPlan) -> bool:
    """Show the plan and ask before writing."""
    print(f"Workspace: {plan.workspace}")
    print(f"Settings:  {plan.settings_dir}")
    print(f"Source:    {plan.source.source_dir} ({plan.source.description})")
    if plan.backup:
        print("Existing settings will be backed up first.")
    print()
    try:
        response = input("Apply these settings? [y/N] ")
    except EOFError:
        # Closed stdin counts as "no"
        print()
        return False
    return response.strip().lower() in ("y", "yes")


def _source_arg(args, config: ImporterConfig) -> Path:
    if args.source:
        return Path(args.source)
    if config.source_path:
        return config.source_path
    return Path.cwd() / DEFAULT_SOURCE_DIR


def cmd_locate(args, importer: SettingsImporter) -> int:
    """List discovered workspaces."""
    workspaces = importer.locate_workspaces()
    if not workspaces:
        print("No Eclipse workspaces found.")
        print("Pass the workspace path with --workspace.")
        return EXIT_FAILED

    print("Eclipse workspaces:\n")
    for path in workspaces:
        print(f"  {path}")
    return EXIT_OK


def cmd_import(args, importer: SettingsImporter) -> int:
    """Import team settings into a workspace."""
    result = importer.import_settings(
        workspace_path=Path(args.workspace) if args.workspace else None,
        source_path=_source_arg(args, importer.config),
        backup=args.backup,
        force=args.yes,
        select_workspace=prompt_workspace,
        confirm=prompt_confirm,
    )

    if not result.applied:
        print("Import cancelled.")
        return EXIT_OK

    if result.backup:
        print(f"Backup: {result.backup.path}")
    print(f"Import complete: {result.file_count} preference file(s) applied")

    warnings = [s for s in result.skipped_lines if s.reason != REASON_METADATA]
    if warnings:
        print(f"\nSkipped lines ({len(warnings)}):")
        for skipped in warnings[:10]:
            print(f"  - {skipped}")
        if len(warnings) > 10:
            print(f"  ... and {len(warnings) - 10} more")

    return EXIT_OK


def cmd_validate(args, importer: SettingsImporter) -> int:
    """Check expected components in a workspace."""
    report = importer.validate_applied(Path(args.workspace))

    print(f"{report.present_count}/{report.total_expected} expected components present\n")
    for component in report.present:
        print(f"  [ok]      {component}")
    for component in report.missing:
        print(f"  [missing] {component}")

    return EXIT_OK if report.complete else EXIT_FAILED


def cmd_summary(args, importer: SettingsImporter) -> int:
    """Summarize a workspace's settings."""
    summary = importer.summarize(Path(args.workspace))

    print(f"Workspace: {summary.workspace}")
    if not summary.has_metadata:
        print("  (no .metadata directory - not opened by Eclipse yet)")
    print(f"Settings:  {summary.settings_dir}\n")

    if not summary.files:
        print("No preference files.")
    for info in summary.files:
        print(f"  {info.component:45s} {info.entry_count:5d} entries")

    if summary.files:
        print(f"\n{len(summary.files)} file(s), {summary.entry_count} entries")
    if summary.backups:
        print(f"{len(summary.backups)} backup(s), latest {summary.backups[0].age_str}")
    return EXIT_OK


def cmd_describe(args, importer: SettingsImporter) -> int:
    """Describe a settings source."""
    description = importer.describe_source(_source_arg(args, importer.config))
    inspection = description.inspection

    print(f"Source: {inspection.source_dir}")
    if description.format == SourceFormat.EPF:
        print(f"Format: combined export ({inspection.epf_file.name})\n")
    else:
        print(f"Format: {len(inspection.prefs_files)} preference file(s)\n")

    for component, count in description.components.items():
        print(f"  {component:45s} {count:5d} entries")

    warnings = [s for s in description.skipped_lines if s.reason != REASON_METADATA]
    if warnings:
        print(f"\n{len(warnings)} line(s) would be skipped")
    return EXIT_OK


def cmd_backups(args, importer: SettingsImporter) -> int:
    """List settings backups of a workspace."""
    summary = importer.summarize(Path(args.workspace))
    if not summary.backups:
        print("No backups.")
        return EXIT_OK

    for backup in summary.backups:
        print(f"  {backup.name}")
        print(f"    Created: {backup.timestamp.strftime('%Y-%m-%d %H:%M:%S')} ({backup.age_str})")
    return EXIT_OK


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="eclipse-settings",
        description="Import team Eclipse settings into a workspace",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  eclipse-settings locate                               # Find workspaces
  eclipse-settings describe ./team-settings             # Inspect a source
  eclipse-settings import --source ./team-settings --backup
  eclipse-settings import -w ~/eclipse-workspace -s ./team-settings -y
  eclipse-settings validate ~/eclipse-workspace
        """,
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Verbose output")
    parser.add_argument("--log-file", help="Also write logs to this file")
    parser.add_argument("--json-logs", action="store_true", help="JSON lines in the log file")
    parser.add_argument(
        "--config",
        help=f"Config file (default: {DEFAULT_CONFIG_PATH})",
    )

    subparsers = parser.add_subparsers(dest="command", help="Command to run")

    locate_parser = subparsers.add_parser("locate", help="Find Eclipse workspaces")
    locate_parser.set_defaults(func=cmd_locate)

    import_parser = subparsers.add_parser("import", help="Import settings")
    import_parser.add_argument("-w", "--workspace", help="Workspace (default: discover)")
    import_parser.add_argument(
        "-s", "--source",
        help=f"Settings source directory (default: ./{DEFAULT_SOURCE_DIR})",
    )
    import_parser.add_argument("-b", "--backup", action="store_true",
                               help="Back up existing settings first")
    import_parser.add_argument("-y", "--yes", action="store_true", help="Skip confirmation")
    import_parser.set_defaults(func=cmd_import)

    validate_parser = subparsers.add_parser("validate", help="Check expected components")
    validate_parser.add_argument("workspace", help="Workspace directory")
    validate_parser.set_defaults(func=cmd_validate)

    summary_parser = subparsers.add_parser("summary", help="Summarize workspace settings")
    summary_parser.add_argument("workspace", help="Workspace directory")
    summary_parser.set_defaults(func=cmd_summary)

    describe_parser = subparsers.add_parser("describe", help="Describe a settings source")
    describe_parser.add_argument(
        "source", nargs="?",
        help=f"Settings source directory (default: ./{DEFAULT_SOURCE_DIR})",
    )
    describe_parser.set_defaults(func=cmd_describe)

    backups_parser = subparsers.add_parser("backups", help="List settings backups")
    backups_parser.add_argument("workspace", help="Workspace directory")
    backups_parser.set_defaults(func=cmd_backups)

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)

    level = logging.DEBUG if args.verbose else logging.INFO
    setup_logging(
        level=level,
        log_file=Path(args.log_file) if args.log_file else None,
        json_logs=args.json_logs,
    )

    if args.command is None:
        parser.print_help()
        return EXIT_OK

    try:
        config = load_config(Path(args.config) if args.config else None)
        importer = SettingsImporter(config)
        return args.func(args, importer)
    except WorkspaceSelectionError as e:
        print(f"Error: {e.message}", file=sys.stderr)
        return EXIT_USAGE
    except SettingsError as e:
        logger.debug("Command failed", exc_info=True)
        print(f"Error: {e.message}", file=sys.stderr)
        return EXIT_FAILED


if __name__ == "__main__":
    sys.exit(main())
