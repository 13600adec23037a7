"""
Command line entry point for comparison project files.

This module handles:
- Command line argument parsing
- Logging configuration
- Settings loading
- Showing, creating and normalizing project files
"""

from __future__ import annotations

import argparse
import logging
import sys
from dataclasses import dataclass
from pathlib import Path
from typing import Optional, List

from compare_project import __version__
from compare_project.core.models import ProjectItem
from compare_project.core.project import ProjectFile
from compare_project.services.settings import SettingsManager


# =============================================================================
# Constants
# =============================================================================

APP_NAME = "compare-project"
APP_VERSION = __version__

EXIT_OK = 0
EXIT_FAILURE = 1


# =============================================================================
# Data Classes
# =============================================================================

@dataclass
class CommandLineArgs:
    """Parsed command line arguments."""
    command: str
    project: str
    namespace: argparse.Namespace
    config_file: Optional[str] = None
    log_level: str = "INFO"
    log_file: Optional[str] = None
    reset_settings: bool = False


# =============================================================================
# Logging Setup
# =============================================================================

class LogFormatter(logging.Formatter):
    """Custom log formatter with colors for console."""

    COLORS = {
        logging.INFO: '\033[32m',      # Green
        logging.WARNING: '\033[33m',   # Yellow
        logging.ERROR: '\033[31m',     # Red
        logging.CRITICAL: '\033[35m',  # Magenta
    }
    RESET = '\033[0m'

    def __init__(self, use_colors: bool = True):
        super().__init__(
            fmt='%(asctime)s | %(levelname)-8s | %(name)s | %(message)s',
            datefmt='%Y-%m-%d %H:%M:%S'
        )
        self.use_colors = use_colors and sys.stderr.isatty()

    def format(self, record: logging.LogRecord) -> str:
        formatted = super().format(record)

        if self.use_colors:
            color = self.COLORS.get(record.levelno, '')
            return f"{color}{formatted}{self.RESET}"

        return formatted


def setup_logging(level: str = "INFO", log_file: Optional[Path] = None) -> logging.Logger:
    """
    Configure application logging.

    Args:
        level: Log level string
        log_file: Optional file path for logging

    Returns:
        Root logger instance
    """
    numeric_level = getattr(logging, level.upper(), logging.INFO)

    root_logger = logging.getLogger()
    root_logger.setLevel(numeric_level)

    root_logger.handlers.clear()

    # stdout is reserved for command output
    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setLevel(numeric_level)
    console_handler.setFormatter(LogFormatter(use_colors=True))
    root_logger.addHandler(console_handler)

    if log_file:
        log_file.parent.mkdir(parents=True, exist_ok=True)

        file_handler = logging.FileHandler(
            log_file,
            encoding='utf-8'
        )
        file_handler.setLevel(numeric_level)
        file_handler.setFormatter(LogFormatter(use_colors=False))
        root_logger.addHandler(file_handler)

    return root_logger


# =============================================================================
# Command Line Parsing
# =============================================================================

def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog=APP_NAME,
        description="Read and write comparison project files",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  %(prog)s show work.WinMerge                          List the comparisons of a project
  %(prog)s create work.WinMerge --left a --right b     Create a two-way project
  %(prog)s create work.WinMerge --left a --middle base --right b --append
  %(prog)s normalize work.WinMerge -o clean.WinMerge   Rewrite a project
        """
    )
    parser.add_argument(
        '--version',
        action='version',
        version=f'%(prog)s {APP_VERSION}'
    )

    # Configuration
    parser.add_argument(
        '-c', '--config',
        help='Settings file path'
    )
    parser.add_argument(
        '--reset-settings',
        action='store_true',
        help='Reset all settings to defaults'
    )

    # Logging
    parser.add_argument(
        '--debug',
        action='store_true',
        help='Enable debug output'
    )
    parser.add_argument(
        '--log-level',
        choices=['DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL'],
        default='WARNING',
        help='Log level'
    )
    parser.add_argument(
        '--log-file',
        help='Also write log messages to this file'
    )

    commands = parser.add_subparsers(dest='command', required=True)

    show = commands.add_parser('show', help='List the items of a project')
    show.add_argument('project', help='Project file to read')

    normalize = commands.add_parser('normalize', help='Read a project and write it back')
    normalize.add_argument('project', help='Project file to read')
    normalize.add_argument(
        '-o', '--output',
        help='Output file (defaults to rewriting the project in place)'
    )

    create = commands.add_parser('create', help='Write a project with one comparison')
    create.add_argument('project', help='Project file to write')
    create.add_argument('--left', required=True, help='Left path')
    create.add_argument('--middle', help='Middle path for three-way comparison')
    create.add_argument('--right', required=True, help='Right path')
    create.add_argument('--left-readonly', action='store_true', help='Open left side read-only')
    create.add_argument('--middle-readonly', action='store_true', help='Open middle side read-only')
    create.add_argument('--right-readonly', action='store_true', help='Open right side read-only')
    create.add_argument('--filter', help='File filter name or mask')
    subfolders = create.add_mutually_exclusive_group()
    subfolders.add_argument(
        '--subfolders',
        dest='subfolders',
        action='store_true',
        default=None,
        help='Include subfolders'
    )
    subfolders.add_argument(
        '--no-subfolders',
        dest='subfolders',
        action='store_false',
        help='Do not include subfolders'
    )
    create.add_argument('--unpacker', help='Unpacker plugin')
    create.add_argument('--prediffer', help='Prediffer plugin')
    create.add_argument('--white-spaces', type=int, help='Whitespace mode (0, 1 or 2)')
    create.add_argument('--ignore-blank-lines', action='store_true', default=None)
    create.add_argument('--ignore-case', action='store_true', default=None)
    create.add_argument('--ignore-eol', action='store_true', default=None,
                        help='Ignore carriage return differences')
    create.add_argument('--ignore-numbers', action='store_true', default=None)
    create.add_argument('--ignore-codepage', action='store_true', default=None)
    create.add_argument('--ignore-comments', action='store_true', default=None,
                        help='Filter comment lines')
    create.add_argument('--compare-method', type=int, help='Folder compare method')
    create.add_argument(
        '--hidden-item',
        action='append',
        default=None,
        help='Hidden item name (repeatable)'
    )
    create.add_argument(
        '--append',
        action='store_true',
        help='Add the comparison to an existing project'
    )

    return parser


def parse_arguments(args: Optional[List[str]] = None) -> CommandLineArgs:
    """
    Parse command line arguments.

    Args:
        args: Arguments to parse (defaults to sys.argv)

    Returns:
        Parsed arguments
    """
    parsed = _build_parser().parse_args(args)

    log_level = 'DEBUG' if parsed.debug else parsed.log_level

    return CommandLineArgs(
        command=parsed.command,
        project=parsed.project,
        namespace=parsed,
        config_file=parsed.config,
        log_level=log_level,
        log_file=parsed.log_file,
        reset_settings=parsed.reset_settings,
    )


# =============================================================================
# Commands
# =============================================================================

def describe_item(index: int, item: ProjectItem) -> List[str]:
    """Format one project item for display."""
    lines = [f"[{index}]"]

    for label, (path, read_only) in (
        ('left', item.get_left()),
        ('middle', item.get_middle()),
        ('right', item.get_right()),
    ):
        if path:
            suffix = " (read-only)" if read_only else ""
            lines.append(f"  {label}: {path}{suffix}")

    if item.has_filter:
        lines.append(f"  filter: {item.filter}")
    if item.has_subfolders:
        lines.append(f"  subfolders: {'yes' if item.subfolders == 1 else 'no'}")
    if item.has_unpacker:
        lines.append(f"  unpacker: {item.unpacker}")
    if item.has_prediffer:
        lines.append(f"  prediffer: {item.prediffer}")

    options = [
        ('white-spaces', item.ignore_whitespace),
        ('ignore-blank-lines', item.ignore_blank_lines),
        ('ignore-case', item.ignore_case),
        ('ignore-carriage-return-diff', item.ignore_eol),
        ('ignore-numbers', item.ignore_numbers),
        ('ignore-codepage-diff', item.ignore_codepage),
        ('ignore-comment-diff', item.filter_comment_lines),
        ('compare-method', item.compare_method),
    ]
    for name, value in options:
        if value is not None:
            lines.append(f"  {name}: {int(value)}")

    if item.has_hidden_items:
        lines.append(f"  hidden: {', '.join(item.hidden_items)}")

    return lines


def build_item(ns: argparse.Namespace) -> ProjectItem:
    """Create a project item from parsed ``create`` arguments."""
    item = ProjectItem()
    item.set_left(ns.left, ns.left_readonly)
    if ns.middle:
        item.set_middle(ns.middle, ns.middle_readonly)
    item.set_right(ns.right, ns.right_readonly)

    item.filter = ns.filter
    if ns.subfolders is not None:
        item.set_subfolders(ns.subfolders)
    item.unpacker = ns.unpacker
    item.prediffer = ns.prediffer

    item.ignore_whitespace = ns.white_spaces
    item.ignore_blank_lines = ns.ignore_blank_lines
    item.ignore_case = ns.ignore_case
    item.ignore_eol = ns.ignore_eol
    item.ignore_numbers = ns.ignore_numbers
    item.ignore_codepage = ns.ignore_codepage
    item.filter_comment_lines = ns.ignore_comments
    item.compare_method = ns.compare_method

    for name in ns.hidden_item or []:
        item.add_hidden_item(name)

    return item


def run_show(args: CommandLineArgs) -> int:
    project = ProjectFile()
    if not project.read(args.project):
        print(f"Error: {project.last_error}", file=sys.stderr)
        return EXIT_FAILURE

    for index, item in enumerate(project.items):
        print('\n'.join(describe_item(index, item)))
    return EXIT_OK


def run_create(args: CommandLineArgs, settings_manager: SettingsManager) -> int:
    project = ProjectFile()
    path = Path(args.project)

    if args.namespace.append and path.exists():
        if not project.read(path):
            print(f"Error: {project.last_error}", file=sys.stderr)
            return EXIT_FAILURE

    item = build_item(args.namespace)
    settings_manager.settings.save_options.apply(item)
    project.add_item(item)

    if not project.save(path):
        print(f"Error: {project.last_error}", file=sys.stderr)
        return EXIT_FAILURE

    settings_manager.add_recent_project(str(path))
    return EXIT_OK


def run_normalize(args: CommandLineArgs, settings_manager: SettingsManager) -> int:
    project = ProjectFile()
    if not project.read(args.project):
        print(f"Error: {project.last_error}", file=sys.stderr)
        return EXIT_FAILURE

    output = args.namespace.output or args.project
    if not project.save(output):
        print(f"Error: {project.last_error}", file=sys.stderr)
        return EXIT_FAILURE

    settings_manager.add_recent_project(str(output))
    return EXIT_OK


# =============================================================================
# Main Entry Point
# =============================================================================

def main(argv: Optional[List[str]] = None) -> int:
    """
    Main entry point.

    Returns:
        Exit code
    """
    args = parse_arguments(argv)

    log_file = Path(args.log_file) if args.log_file else None
    setup_logging(args.log_level, log_file)
    logging.debug(f"Starting {APP_NAME} v{APP_VERSION}: {args.command} {args.project}")

    config_path = Path(args.config_file) if args.config_file else None
    settings_manager = SettingsManager(config_path)
    if args.reset_settings:
        settings_manager.reset()
        logging.info("Settings reset to defaults")

    if args.command == 'show':
        return run_show(args)
    if args.command == 'create':
        return run_create(args, settings_manager)
    return run_normalize(args, settings_manager)


if __name__ == '__main__':
    sys.exit(main())
