"""Command-line front door for lstree.

Parses CLI options, merges them with persisted defaults, loads exclusion
patterns, then streams the tree to stdout followed by the summary lines.
"""

from __future__ import annotations

import argparse
import logging
import sys
import time
from collections.abc import Sequence
from pathlib import Path

from . import __version__
from .config import load_config, load_ignore_patterns, load_show_hidden, load_theme_name, load_use_gitignore
from .logging_setup import setup_logging
from .options import TreeOptions
from .patterns import load_patterns
from .render import format_elapsed, format_summary
from .ui_theme import available_theme_names, resolve_theme
from .walker import render_tree

logger = logging.getLogger(__name__)


def _non_negative_int(value: str) -> int:
    """argparse type for non-negative integer values."""
    try:
        parsed = int(value)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(f"invalid integer value: {value!r}") from exc
    if parsed < 0:
        raise argparse.ArgumentTypeError("value must be >= 0")
    return parsed


def build_parser() -> argparse.ArgumentParser:
    # -h is taken by --show-hidden, so help is long-form only.
    parser = argparse.ArgumentParser(
        prog="lstree",
        description="List directory contents as a tree.",
        add_help=False,
    )
    parser.add_argument("path", nargs="?", default=None, help="Directory to list. Defaults to current directory.")
    parser.add_argument("-d", "--max-depth", type=_non_negative_int, default=None, help="Descend at most N levels.")
    parser.add_argument("-h", "--show-hidden", action="store_true", help="Include hidden files.")
    parser.add_argument("-p", "--parallel", action="store_true", help="Use parallelism (not implemented).")
    parser.add_argument("-i", "--ignore", default=None, metavar="PATTERNS", help="Patterns to ignore, separated by '|'.")
    parser.add_argument("-g", "--no-gitignore", action="store_true", help="Disable .gitignore file processing.")
    parser.add_argument("--no-color", action="store_true", help="Disable color output even on TTY.")
    parser.add_argument(
        "--theme",
        default=None,
        help=f"UI theme name ({', '.join(available_theme_names())}).",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Log skipped entries to stderr.")
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument("--help", action="help", help="Show this help message and exit.")
    return parser


def options_from_args(args: argparse.Namespace, default_path: Path | None = None) -> TreeOptions:
    """Merge parsed arguments with persisted defaults into ``TreeOptions``.

    The config file is read once; command-line flags win over its values.
    """
    saved = load_config()
    if args.path is not None:
        path = Path(args.path)
    else:
        path = default_path if default_path is not None else Path.cwd()
    return TreeOptions(
        path=path,
        max_depth=args.max_depth,
        show_hidden=args.show_hidden or load_show_hidden(saved),
        parallel=args.parallel,
        ignore=args.ignore if args.ignore is not None else load_ignore_patterns(saved),
        use_gitignore=not args.no_gitignore and load_use_gitignore(saved),
        no_color=args.no_color or not sys.stdout.isatty(),
        theme=args.theme or load_theme_name(saved),
        root_label=args.path if args.path is not None else str(path),
    )


def _write_line(line: str) -> None:
    sys.stdout.write(line + "\n")


def main(argv: Sequence[str] | None = None, default_path: Path | None = None) -> None:
    """Parse CLI arguments and print the tree for one directory.

    ``default_path`` is primarily for tests; when omitted the current working
    directory is used.
    """
    args = build_parser().parse_args(argv)
    setup_logging("DEBUG" if args.verbose else None)
    options = options_from_args(args, default_path)
    theme = resolve_theme(options.theme, no_color=options.no_color)

    if options.parallel:
        logger.debug("--parallel has no effect; directories are listed sequentially")
    if not options.path.is_dir():
        logger.warning("%s is not a readable directory", options.path)

    start = time.perf_counter()
    patterns = load_patterns(options.path, options.ignore, options.use_gitignore)
    stats = render_tree(options, patterns, _write_line, theme)
    elapsed = time.perf_counter() - start

    _write_line("")
    _write_line(format_summary(stats.directories, stats.files, theme))
    _write_line(format_elapsed(elapsed, theme))


if __name__ == "__main__":
    main()
