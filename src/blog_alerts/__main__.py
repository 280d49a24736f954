"""CLI entry point for Blog Alerts.

This module applies the alert transform to rendered HTML files from the
command line.

Usage:
    python -m blog_alerts [options] [paths ...]
"""

from __future__ import annotations

import argparse
import logging
import logging.config
import sys
from pathlib import Path
from typing import NoReturn

from pydantic import ValidationError

from blog_alerts import __version__
from blog_alerts.config import Settings, clear_settings_cache, get_settings
from blog_alerts.transformer import AlertConfigError, AlertTransformer

# Application info
APP_NAME = "Blog Alerts"
APP_VERSION = __version__

# Exit codes
EXIT_SUCCESS = 0
EXIT_ERROR = 1
EXIT_CONFIG_ERROR = 2
EXIT_INTERRUPTED = 130

HTML_SUFFIXES = (".html", ".htm")

logger = logging.getLogger(__name__)


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser for the CLI.

    Returns:
        Configured ArgumentParser instance.
    """
    parser = argparse.ArgumentParser(
        prog="blog-alerts",
        description="Render [!NOTE]-style blockquotes in HTML as styled alert boxes.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  python -m blog_alerts public/post.html          Print transformed HTML
  python -m blog_alerts --in-place public/        Rewrite every HTML file in place
  python -m blog_alerts -o dist/ public/          Write results under dist/
  python -m blog_alerts --dry-run public/         Count alerts without writing
  python -m blog_alerts < post.html               Transform stdin to stdout
  python -m blog_alerts --config-check            Validate config and exit
        """,
    )

    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {APP_VERSION}",
    )

    parser.add_argument(
        "paths",
        nargs="*",
        type=Path,
        help="HTML files or directories (default: read stdin)",
    )

    output = parser.add_mutually_exclusive_group()
    output.add_argument(
        "--in-place",
        action="store_true",
        help="Rewrite files where they are",
    )
    output.add_argument(
        "-o",
        "--output-dir",
        type=Path,
        default=None,
        help="Write transformed files under this directory",
    )

    parser.add_argument(
        "--config-check",
        action="store_true",
        help="Validate configuration and exit without transforming",
    )

    parser.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        default=None,
        help="Override logging level (default: from settings)",
    )

    parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Transform and report alert counts without writing anything",
    )

    return parser


def configure_logging(level: str) -> None:
    """Configure logging for the application.

    Log records go to stderr so that stdout stays free for HTML output.

    Args:
        level: Logging level string (DEBUG, INFO, etc.)
    """
    config = {
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": {
            "standard": {
                "format": "%(asctime)s [%(levelname)s] %(name)s: %(message)s",
                "datefmt": "%Y-%m-%d %H:%M:%S",
            },
            "detailed": {
                "format": (
                    "%(asctime)s [%(levelname)s] %(name)s (%(filename)s:%(lineno)d): %(message)s"
                ),
                "datefmt": "%Y-%m-%d %H:%M:%S",
            },
        },
        "handlers": {
            "console": {
                "class": "logging.StreamHandler",
                "level": level,
                "formatter": "detailed" if level == "DEBUG" else "standard",
                "stream": "ext://sys.stderr",
            },
        },
        "root": {
            "level": level,
            "handlers": ["console"],
        },
    }
    logging.config.dictConfig(config)


def print_config_summary(settings: Settings) -> None:
    """Print a summary of the configuration.

    Args:
        settings: Application settings.
    """
    summary = settings.summary()
    print("Configuration:")
    print(f"  Container Tag: {summary['container_tag']}")
    print(f"  Title Tag: {summary['title_tag']}")
    print(f"  Label Overrides: {summary['label_overrides']}")
    print(f"  Log Level: {summary['log_level']}")
    print()


def validate_config() -> Settings | None:
    """Validate and load configuration.

    Returns:
        Settings instance if valid, None if invalid.
    """
    try:
        # Clear cache to force reload
        clear_settings_cache()
        return get_settings()
    except ValidationError as e:
        print("Configuration validation failed:", file=sys.stderr)
        for error in e.errors():
            field = ".".join(str(loc) for loc in error["loc"])
            msg = error["msg"]
            print(f"  {field}: {msg}", file=sys.stderr)
        return None


def run_config_check(settings: Settings) -> int:
    """Run configuration check and exit.

    Args:
        settings: Validated settings.

    Returns:
        Exit code (0 for success).
    """
    print(f"{APP_NAME} v{APP_VERSION}")
    print("Configuration is valid!")
    print()
    print_config_summary(settings)

    try:
        AlertTransformer.from_settings(settings)
    except AlertConfigError as e:
        print(f"Alert styles invalid: {e}", file=sys.stderr)
        return EXIT_CONFIG_ERROR

    print("All checks passed. Ready to run.")
    return EXIT_SUCCESS


def collect_html_files(paths: list[Path]) -> list[tuple[Path, Path]]:
    """Expand input paths into HTML files.

    Directories are searched recursively. Each file is returned with
    its path relative to the directory it was found under (or its bare
    name for files given directly).

    Raises:
        FileNotFoundError: If an input path does not exist.
    """
    files: list[tuple[Path, Path]] = []
    for path in paths:
        if path.is_dir():
            for candidate in sorted(path.rglob("*")):
                if candidate.is_file() and candidate.suffix.lower() in HTML_SUFFIXES:
                    files.append((candidate, candidate.relative_to(path)))
        elif path.is_file():
            files.append((path, Path(path.name)))
        else:
            raise FileNotFoundError(f"Input path not found: {path}")
    return files


def transform_file(
    source: Path,
    transformer: AlertTransformer,
    destination: Path | None,
    dry_run: bool = False,
) -> int:
    """Transform one HTML file.

    Args:
        source: File to read.
        transformer: Transformer to apply.
        destination: File to write, or None to print to stdout.
        dry_run: Skip writing and printing.

    Returns:
        Number of alerts rendered.
    """
    html = source.read_text(encoding="utf-8")
    result, count = transformer.transform_with_count(html)

    if dry_run:
        logger.info("%s: %d alert(s) (dry run)", source, count)
        return count

    if destination is None:
        sys.stdout.write(result)
    elif destination == source and count == 0:
        logger.debug("%s: no alerts, left unchanged", source)
    else:
        destination.parent.mkdir(parents=True, exist_ok=True)
        destination.write_text(result, encoding="utf-8")
        logger.info("%s: %d alert(s) -> %s", source, count, destination)
    return count


def run(args: argparse.Namespace, transformer: AlertTransformer) -> int:
    """Transform the requested inputs.

    Args:
        args: Parsed command line arguments.
        transformer: Transformer to apply.

    Returns:
        Exit code.
    """
    if not args.paths:
        result, count = transformer.transform_with_count(sys.stdin.read())
        if not args.dry_run:
            sys.stdout.write(result)
        logger.info("stdin: %d alert(s)", count)
        return EXIT_SUCCESS

    try:
        files = collect_html_files(args.paths)
    except FileNotFoundError as e:
        logger.error("%s", e)
        return EXIT_ERROR

    if args.output_dir is not None:
        seen: dict[Path, Path] = {}
        for source, relative in files:
            if relative in seen:
                logger.error(
                    "%s and %s would both be written to %s",
                    seen[relative],
                    source,
                    args.output_dir / relative,
                )
                return EXIT_ERROR
            seen[relative] = source

    total = 0
    for source, relative in files:
        if args.in_place:
            destination: Path | None = source
        elif args.output_dir is not None:
            destination = args.output_dir / relative
        else:
            destination = None
        total += transform_file(source, transformer, destination, dry_run=args.dry_run)

    logger.info("Rendered %d alert(s) across %d file(s)", total, len(files))
    return EXIT_SUCCESS


def main(argv: list[str] | None = None) -> NoReturn:
    """Main entry point for the CLI.

    Args:
        argv: Command line arguments (defaults to sys.argv[1:]).
    """
    parser = create_parser()
    args = parser.parse_args(argv)

    # Validate configuration first
    settings = validate_config()
    if settings is None:
        sys.exit(EXIT_CONFIG_ERROR)

    log_level = args.log_level or settings.log_level
    configure_logging(log_level)

    if args.config_check:
        sys.exit(run_config_check(settings))

    try:
        transformer = AlertTransformer.from_settings(settings)
    except AlertConfigError as e:
        print(f"Alert styles invalid: {e}", file=sys.stderr)
        sys.exit(EXIT_CONFIG_ERROR)

    try:
        exit_code = run(args, transformer)
    except KeyboardInterrupt:
        logger.info("Interrupted by user")
        exit_code = EXIT_INTERRUPTED
    except OSError as e:
        logger.exception("Transform failed: %s", e)
        exit_code = EXIT_ERROR
    sys.exit(exit_code)


if __name__ == "__main__":
    main()
