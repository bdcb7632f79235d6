"""
Command-line interface for Mason.

This module provides the `mason` CLI. Run with no subcommand from a Cargo
build script it performs a build using TARGET and OUT_DIR from the
environment, writing cargo directives to stdout.
"""

import argparse
import logging
import sys
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional, Sequence

from mason import __version__
from mason.build import BuildOrchestrator
from mason.build.context import DEFAULT_ARCHIVE_NAME
from mason.cli_utils import BuildEnvironment, ErrorFormatter
from mason.config import resolve_target, supported_architectures
from mason.config.target_specs import TARGET_SPECS
from mason.errors import MasonError
from mason.packages import DEFAULT_SUFFIX, Toolchain

COMMANDS = ("build", "plan", "targets", "doctor")


@dataclass
class BuildArgs:
    """Arguments for the build and plan commands."""

    target: Optional[str] = None
    out_dir: Optional[Path] = None
    manifest_dir: Optional[Path] = None
    include_files: List[str] = field(default_factory=list)
    asm_dirs: List[str] = field(default_factory=list)
    archive_name: Optional[str] = None
    toolchain_dir: Optional[Path] = None
    toolchain_suffix: Optional[str] = None
    progress: bool = False
    verbose: bool = False


def setup_logging(verbose: bool = False) -> None:
    """Send log output to stderr; stdout is reserved for cargo directives."""
    logger = logging.getLogger()
    logger.setLevel(logging.DEBUG if verbose else logging.INFO)

    for handler in list(logger.handlers):
        if handler.get_name() == "mason":
            logger.removeHandler(handler)

    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.set_name("mason")
    console_handler.setFormatter(logging.Formatter("mason: %(levelname)s: %(message)s"))
    logger.addHandler(console_handler)


def _merge_with_environment(args: BuildArgs, env: BuildEnvironment) -> BuildArgs:
    """Fill in anything not given on the command line from the environment."""
    return BuildArgs(
        target=args.target or env.triple,
        out_dir=args.out_dir or env.output_dir,
        manifest_dir=args.manifest_dir,
        include_files=env.include_files + args.include_files,
        asm_dirs=env.asm_dirs + args.asm_dirs,
        archive_name=args.archive_name or env.archive_name or DEFAULT_ARCHIVE_NAME,
        toolchain_dir=args.toolchain_dir or env.toolchain_dir,
        toolchain_suffix=args.toolchain_suffix or env.toolchain_suffix or DEFAULT_SUFFIX,
        progress=args.progress,
        verbose=args.verbose or env.verbose,
    )


def build_command(args: BuildArgs) -> None:
    """Assemble and package everything the manifest lists for the target.

    Examples:
        mason                                   # Build script mode (TARGET, OUT_DIR)
        mason build --target riscv64gc-unknown-none-elf --out-dir build
        mason build --asm-dir src/boot          # Add a directory to the manifest's
    """
    triple = BuildEnvironment(triple=args.target).require_triple()
    output_dir = BuildEnvironment(output_dir=args.out_dir).require_output_dir()

    orchestrator = BuildOrchestrator(show_progress=args.progress)
    result = orchestrator.build(
        triple=triple,
        output_dir=output_dir,
        start_dir=args.manifest_dir,
        extra_files=args.include_files,
        extra_asm_dirs=args.asm_dirs,
        archive_name=args.archive_name or DEFAULT_ARCHIVE_NAME,
        toolchain_suffix=args.toolchain_suffix or DEFAULT_SUFFIX,
        toolchain_dir=args.toolchain_dir,
    )

    logging.info(
        f"Archived {len(result.objects)} objects into {result.archive_path} "
        + f"in {result.build_time:.2f}s"
    )
    if args.verbose:
        for obj in result.objects:
            logging.debug(f"  {obj}")


def plan_command(args: BuildArgs) -> None:
    """Show what a build would process, without running any tools."""
    triple = BuildEnvironment(triple=args.target).require_triple()

    plan = BuildOrchestrator().plan(
        triple=triple,
        start_dir=args.manifest_dir,
        extra_files=args.include_files,
        extra_asm_dirs=args.asm_dirs,
    )
    target = plan.target

    print(f"Triple:    {plan.triple}")
    print(f"Arch:      {target.cpu_arch} (abi {target.abi}, platform {target.platform})")
    print(f"Widths:    ptr={target.ptr_width} flt={target.flt_width}")
    print(f"Manifest:  {plan.manifest_path}")
    print("Binaries:")
    for path in sorted(plan.paths.include_files):
        print(f"  {path}")
    print("Assembly directories:")
    for path in sorted(plan.paths.asm_dirs):
        print(f"  {path}")


def targets_command() -> None:
    """List supported architectures."""
    for arch in supported_architectures():
        target = TARGET_SPECS[arch]
        print(f"{arch:<14} {target.cpu_arch:<10} {target.abi:<6} {target.gnu_prefix}")


def doctor_command(args: BuildArgs) -> None:
    """Check that the binutils for the target are installed."""
    triple = BuildEnvironment(triple=args.target).require_triple()
    toolchain = Toolchain.from_target(
        resolve_target(triple),
        args.toolchain_suffix or DEFAULT_SUFFIX,
        args.toolchain_dir,
    )
    for role in Toolchain.REQUIRED_TOOLS:
        print(f"{role:<8} {toolchain.get_tool_path(role)}")
    toolchain.verify()
    ErrorFormatter.print_success(f"Toolchain for {triple} is complete")


def _add_build_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "-t",
        "--target",
        default=None,
        help="Target triple (default: $TARGET)",
    )
    parser.add_argument(
        "-o",
        "--out-dir",
        type=Path,
        default=None,
        help="Output directory for objects and the archive (default: $OUT_DIR)",
    )
    parser.add_argument(
        "--manifest-dir",
        type=Path,
        default=None,
        help="Directory to start searching for mason.toml (default: current directory)",
    )
    parser.add_argument(
        "--include-file",
        dest="include_files",
        action="append",
        default=[],
        help="Binary file to package (repeatable, added to the manifest's)",
    )
    parser.add_argument(
        "--asm-dir",
        dest="asm_dirs",
        action="append",
        default=[],
        help="Assembly source directory (repeatable, added to the manifest's)",
    )
    parser.add_argument(
        "--archive-name",
        default=None,
        help=f"Archive name, written as lib<name>.a (default: {DEFAULT_ARCHIVE_NAME})",
    )
    parser.add_argument(
        "--toolchain-dir",
        type=Path,
        default=None,
        help="Directory holding the GNU binutils (default: search PATH)",
    )
    parser.add_argument(
        "--toolchain-suffix",
        default=None,
        help=f"Binutils name suffix, as in riscv64-<suffix>-as (default: {DEFAULT_SUFFIX})",
    )
    parser.add_argument(
        "--progress",
        action="store_true",
        help="Show a progress bar on stderr",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Show debug output",
    )


def create_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="mason",
        description="Mason - assemble and package low-level code for linking",
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"mason {__version__}",
    )

    subparsers = parser.add_subparsers(dest="command", help="Command to run")

    build_parser = subparsers.add_parser(
        "build",
        help="Assemble, package and archive the manifest's inputs (default)",
    )
    _add_build_arguments(build_parser)

    plan_parser = subparsers.add_parser(
        "plan",
        help="Show the resolved target and inputs without running tools",
    )
    _add_build_arguments(plan_parser)

    subparsers.add_parser(
        "targets",
        help="List supported architectures",
    )

    doctor_parser = subparsers.add_parser(
        "doctor",
        help="Check the toolchain for a target is installed",
    )
    _add_build_arguments(doctor_parser)

    return parser


def _with_default_command(argv: List[str]) -> List[str]:
    """Treat a bare `mason` (or one starting with options) as `mason build`."""
    if not argv:
        return ["build"]
    if argv[0] in COMMANDS or argv[0] in ("-h", "--help", "--version"):
        return argv
    return ["build"] + argv


def main(argv: Optional[Sequence[str]] = None) -> None:
    """Mason - pre-build orchestrator for assembly and binary blobs.

    This is the single place failures are reported: every MasonError raised
    below ends the process with a message on stderr and exit status 1.
    """
    raw_args = list(sys.argv[1:] if argv is None else argv)
    parsed_args = create_parser().parse_args(_with_default_command(raw_args))

    if parsed_args.command == "targets":
        targets_command()
        return

    env = BuildEnvironment.from_environ()
    args = _merge_with_environment(
        BuildArgs(
            target=parsed_args.target,
            out_dir=parsed_args.out_dir,
            manifest_dir=parsed_args.manifest_dir,
            include_files=parsed_args.include_files,
            asm_dirs=parsed_args.asm_dirs,
            archive_name=parsed_args.archive_name,
            toolchain_dir=parsed_args.toolchain_dir,
            toolchain_suffix=parsed_args.toolchain_suffix,
            progress=parsed_args.progress,
            verbose=parsed_args.verbose,
        ),
        env,
    )
    setup_logging(args.verbose)

    try:
        if parsed_args.command == "plan":
            plan_command(args)
        elif parsed_args.command == "doctor":
            doctor_command(args)
        else:
            build_command(args)
    except MasonError as e:
        ErrorFormatter.handle_mason_error(e)
    except KeyboardInterrupt:
        ErrorFormatter.handle_keyboard_interrupt()
    except Exception as e:
        ErrorFormatter.handle_unexpected_error(e, args.verbose)


if __name__ == "__main__":
    main()
