#!/usr/bin/env python3
"""Extension index management CLI tool."""

import argparse
import json
import logging
import os
import sys
from pathlib import Path

from dotenv import load_dotenv

from extension_finder.config import FinderConfig
from extension_finder.errors import ExtensionFinderError
from extension_finder.finder import ExtensionFinder
from extension_finder.loader import LoadStatus

logger = logging.getLogger(__name__)


def configure_logging() -> None:
    """Configure root logging from LOG_LEVEL."""
    log_level = os.getenv("LOG_LEVEL", "INFO")
    logging.basicConfig(
        level=getattr(logging, log_level.upper(), logging.INFO),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )


def get_finder(args) -> ExtensionFinder:
    """Create an ExtensionFinder for the selected root."""
    root = Path(args.root).resolve() if args.root else None
    return ExtensionFinder(FinderConfig.from_env(root))


def cmd_build(args):
    """Rebuild autoload.json."""
    finder = get_finder(args)
    try:
        index = finder.build()
    except ExtensionFinderError as e:
        print(f"Build failed: {e}")
        sys.exit(1)

    print(f"Indexed {len(index)} extension(s) into {finder.config.cache_path}")


def cmd_list(args):
    """List the extensions recorded in autoload.json."""
    finder = get_finder(args)
    try:
        index = finder.read_index()
    except ExtensionFinderError as e:
        print(f"Cannot read extension index: {e}")
        sys.exit(1)

    if not index:
        print("No extensions indexed. Run 'build' first.")
        return

    print(f"{'Name':<30} {'Class':<40} {'Path'}")
    print("-" * 100)

    for descriptor in index.values():
        print(f"{descriptor.name:<30} {descriptor.entry_class:<40} {descriptor.path}")


def cmd_load(args):
    """Run a load pass and report each entry."""
    finder = get_finder(args)
    try:
        report = finder.load_with_report()
    except ExtensionFinderError as e:
        print(f"Load failed: {e}")
        sys.exit(1)

    if report.skipped_reason:
        print(f"No extensions loaded ({report.skipped_reason}).")
        return

    for outcome in report.outcomes:
        line = f"{outcome.descriptor_name:<30} {outcome.status.value:<20}"
        if outcome.status == LoadStatus.LOADED:
            line += f" as {outcome.resolved_name}"
        else:
            line += f" {outcome.detail}"
        print(line)

    if args.json:
        data = {name: ext.to_dict() for name, ext in report.extensions.items()}
        print(json.dumps(data, indent=4, ensure_ascii=False))

    print(f"{len(report.extensions)} extension(s) loaded.")


def cmd_doctor(args):
    """Run health checks on the extension setup."""
    finder = get_finder(args)
    config = finder.config
    issues = []

    # Check directories
    if not any(root.is_dir() for root in config.search_roots):
        roots = ", ".join(str(r) for r in config.search_roots)
        issues.append(f"No extension search root exists: {roots}")

    # Check bootstrap
    if not config.bootstrap_path.is_file():
        issues.append(f"Bootstrap file missing: {config.bootstrap_path}")

    # Check cache file
    if not config.cache_path.is_file():
        issues.append(f"Extension index missing: {config.cache_path}")
    else:
        try:
            index = finder.read_index()
        except ExtensionFinderError as e:
            issues.append(f"Extension index is corrupt: {e}")
            index = {}

        # Check that the index is current
        try:
            for manifest_file in finder.scanner.scan():
                name = finder.builder.parse_manifest(manifest_file).name
                if name not in index:
                    issues.append(f"Extension '{name}' at {manifest_file.parent} is not indexed")
        except ExtensionFinderError as e:
            issues.append(f"Manifest problem: {e}")

        # Check entry classes
        if index and config.bootstrap_path.is_file():
            report = finder.load_with_report()
            if report.skipped_reason:
                issues.append(f"Load pass skipped: {report.skipped_reason}")
            for outcome in report.skipped():
                issues.append(
                    f"Extension '{outcome.descriptor_name}': {outcome.status.value} "
                    f"({outcome.entry_class})"
                )

    if issues:
        print(f"Found {len(issues)} issue(s):")
        for i, issue in enumerate(issues, 1):
            print(f"  {i}. {issue}")
        sys.exit(1)
    else:
        print("All checks passed.")


def main(argv=None):
    load_dotenv()
    configure_logging()

    parser = argparse.ArgumentParser(description="Extension index manager")
    parser.add_argument("--root", help="Extension root directory (default: EXTENSIONS_ROOT or cwd)")
    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # build
    subparsers.add_parser("build", help="Rebuild the extension index")

    # list
    subparsers.add_parser("list", help="List indexed extensions")

    # load
    load_parser = subparsers.add_parser("load", help="Load extensions and report outcomes")
    load_parser.add_argument("--json", action="store_true", help="Also print loaded extensions as JSON")

    # doctor
    subparsers.add_parser("doctor", help="Run health checks")

    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        sys.exit(1)

    commands = {
        "build": cmd_build,
        "list": cmd_list,
        "load": cmd_load,
        "doctor": cmd_doctor,
    }

    commands[args.command](args)


if __name__ == "__main__":
    main()
