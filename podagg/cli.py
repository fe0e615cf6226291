# SPDX-License-Identifier: MIT
"""Command-line interface for podagg."""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import TYPE_CHECKING, Any

from podagg.core.errors import PodaggError

if TYPE_CHECKING:
    from podagg.core.aggregate_target import AggregateTarget

# Set up logging
logger = logging.getLogger("podagg")


def setup_logging(verbose: bool = False, debug: bool = False) -> None:
    """Configure logging based on verbosity level."""
    if debug:
        level = logging.DEBUG
        fmt = "%(levelname)s: %(name)s: %(message)s"
    elif verbose:
        level = logging.INFO
        fmt = "%(levelname)s: %(message)s"
    else:
        level = logging.WARNING
        fmt = "%(levelname)s: %(message)s"

    logging.basicConfig(level=level, format=fmt)


def describe_target(
    target: AggregateTarget, configuration: str | None = None
) -> dict[str, Any]:
    """Summarize an aggregate target as JSON-serializable data.

    Args:
        target: The aggregate target.
        configuration: Only report this configuration (default: all).

    Raises:
        ConfigurationNotFoundError: If the configuration is unknown.
    """
    if configuration is None:
        configurations = list(target.user_build_configurations)
    else:
        target.build_settings(configuration)
        configurations = [configuration]

    framework_paths = target.framework_paths_by_config()
    resource_paths = target.resource_paths_by_config()
    report: dict[str, Any] = {
        "label": target.label,
        "platform": str(target.platform),
        "pod_targets": [pod_target.name for pod_target in target.pod_targets],
        "uses_swift": target.uses_swift(),
        "pods_root": str(target.relative_pods_root),
        "podfile_dir": str(target.podfile_dir_relative_path),
        "configurations": {},
    }
    if target.user_project is not None:
        report["library"] = target.library()
        report["requires_host_target"] = target.requires_host_target()
    bridge_support = target.bridge_support_file()
    if bridge_support is not None:
        report["bridge_support_file"] = bridge_support.as_posix()

    for name in configurations:
        report["configurations"][name] = {
            "xcconfig": target.xcconfig_relative_path(name),
            "build_settings": target.build_settings(name).to_xcconfig().attributes,
            "framework_paths": [
                {"input": paths.input_path, "output": paths.output_path}
                for paths in framework_paths[name]
            ],
            "resource_paths": resource_paths[name],
        }
    return report


def cmd_show(args: argparse.Namespace) -> int:
    """Print what an aggregate target resolves to, as JSON."""
    setup_logging(args.verbose, args.debug)

    from podagg.configure.manifest import load_manifest

    try:
        target = load_manifest(Path(args.manifest))
        report = describe_target(target, args.configuration)
    except PodaggError as e:
        logger.error("%s", e)
        return 1

    print(json.dumps(report, indent=2))
    return 0


def cmd_xcconfig(args: argparse.Namespace) -> int:
    """Write the aggregate target's xcconfig files."""
    setup_logging(args.verbose, args.debug)

    from podagg.configure.manifest import load_manifest
    from podagg.generators.xcconfig import XcconfigGenerator

    output_dir = Path(args.output_dir) if args.output_dir else None
    try:
        target = load_manifest(Path(args.manifest))
        written = XcconfigGenerator().generate(target, output_dir)
    except PodaggError as e:
        logger.error("%s", e)
        return 1
    except OSError as e:
        logger.error("Failed to write xcconfig: %s", e)
        return 1

    for path in written:
        logger.info("Created %s", path)
        print(path)
    return 0


def add_common_args(parser: argparse.ArgumentParser) -> None:
    """Add common arguments to a parser."""
    parser.add_argument("-v", "--verbose", action="store_true", help="Verbose output")
    parser.add_argument("--debug", action="store_true", help="Debug output")
    parser.add_argument("manifest", help="Path to the integration manifest (TOML)")


def main(argv: list[str] | None = None) -> int:
    """Main entry point for the podagg CLI."""
    parser = argparse.ArgumentParser(
        prog="podagg",
        description="Consolidate pod targets into aggregate targets.",
        epilog="Run 'podagg <command> --help' for command-specific help.",
    )
    from podagg import __version__

    parser.add_argument(
        "--version", action="version", version=f"%(prog)s {__version__}"
    )

    subparsers = parser.add_subparsers(dest="command", help="Commands")

    # podagg show
    show_parser = subparsers.add_parser(
        "show", help="Show settings, frameworks and resources as JSON"
    )
    add_common_args(show_parser)
    show_parser.add_argument(
        "-c", "--configuration", help="Only show this build configuration"
    )
    show_parser.set_defaults(func=cmd_show)

    # podagg xcconfig
    xcconfig_parser = subparsers.add_parser(
        "xcconfig", help="Write the per-configuration xcconfig files"
    )
    add_common_args(xcconfig_parser)
    xcconfig_parser.add_argument(
        "-o",
        "--output-dir",
        help="Directory to write to (default: the target support files dir)",
    )
    xcconfig_parser.set_defaults(func=cmd_xcconfig)

    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        return 1

    result: int = args.func(args)
    return result


if __name__ == "__main__":
    sys.exit(main())
