"""
Main entry point for classforge.
Usage: python -m classforge {show,check,new} PROJECT
"""

import argparse
import logging
import sys
from typing import Optional, Sequence

from . import __version__
from .layout import ClassList, LayoutInvariantError
from .project import ProjectSession
from .settings import AppSettings, ConfigError
from .utils.logging_config import setup_logging


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="classforge", description="Inspect and create structure layout projects"
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument("--settings", help="INI file to use instead of the user settings")
    parser.add_argument("-v", "--verbose", action="store_true", help="log debug output")

    commands = parser.add_subparsers(dest="command", required=True)

    show = commands.add_parser("show", help="print class layouts")
    show.add_argument("project", help="project file")
    show.add_argument("--class", dest="class_name", help="only show this class")

    check = commands.add_parser("check", help="load a project and verify it")
    check.add_argument("project", help="project file")

    new = commands.add_parser("new", help="create a project with one class")
    new.add_argument("project", help="project file to write")
    new.add_argument("--class", dest="class_name", help="class name")
    new.add_argument("--bytes", type=int, help="initial class size in bytes")

    return parser


def format_class_list(classes: ClassList, class_name: Optional[str] = None) -> list[str]:
    """Render class layouts as text lines."""
    lines: list[str] = []
    for cls in classes:
        if class_name is not None and cls.name != class_name:
            continue
        lines.append(f"{cls.name} (0x{cls.size:X} bytes)")
        for row in cls.layout(classes):
            lines.append(f"  0x{row.offset:04X}  {row.size:>4}  {row.field.declaration(classes)}")
    return lines


def run_show(session: ProjectSession, args: argparse.Namespace) -> int:
    if not session.open_project(args.project):
        return 1

    if args.class_name and session.class_list.by_name(args.class_name) is None:
        print(f"No class named '{args.class_name}'", file=sys.stderr)
        return 1

    print("\n".join(format_class_list(session.class_list, args.class_name)))
    return 0


def run_check(session: ProjectSession, args: argparse.Namespace) -> int:
    if not session.open_project(args.project):
        print(f"{args.project}: could not open project", file=sys.stderr)
        return 1

    try:
        session.class_list.check_integrity()
    except LayoutInvariantError as e:
        print(f"{args.project}: {e}", file=sys.stderr)
        return 1

    field_count = sum(len(cls.fields) for cls in session.class_list)
    print(f"{args.project}: {len(session.class_list)} class(es), {field_count} field(s), OK")
    return 0


def run_new(session: ProjectSession, args: argparse.Namespace) -> int:
    if args.bytes is not None and args.bytes <= 0:
        print("--bytes must be positive", file=sys.stderr)
        return 1

    try:
        session.add_class(args.class_name, args.bytes)
    except ValueError as e:
        print(e, file=sys.stderr)
        return 1
    return 0 if session.save_project_as(args.project) else 1


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Main application entry point."""
    args = build_parser().parse_args(argv)
    logger = logging.getLogger(f"{__name__}.main")

    try:
        settings = AppSettings(settings_file=args.settings)
    except ConfigError as e:
        print(f"Configuration error: {e}", file=sys.stderr)
        return 1

    setup_logging(settings, console_level="DEBUG" if args.verbose else None)
    logger.debug(f"Configuration loaded from {settings.get_settings_file_path()}")

    validation = settings.validate()
    for warning in validation.warnings:
        logger.warning(warning)
    if not validation.is_valid:
        for error in validation.errors:
            logger.error(error)
        return 1

    session = ProjectSession(settings)
    handlers = {"show": run_show, "check": run_check, "new": run_new}
    try:
        return handlers[args.command](session, args)
    except LayoutInvariantError:
        logger.exception("Project is structurally broken")
        return 1


if __name__ == "__main__":
    sys.exit(main())
