"""CLI entrypoints for cssloader commands."""

from __future__ import annotations

import argparse
import sys
from pathlib import Path

from .config import ConfigError, LoaderConfig, load_config
from .context import FixedContextDetector
from .discovery import FilesystemCssDiscovery
from .lifecycle import check_version, enable
from .logging import configure_logging
from .orchestrator import CssLoaderOrchestrator


def _add_verbose_option(
    parser: argparse.ArgumentParser, *, suppress_default: bool = False
) -> None:
    kwargs: dict[str, object] = {
        "action": "store_true",
        "help": "Increase log verbosity for troubleshooting.",
    }
    if suppress_default:
        kwargs["default"] = argparse.SUPPRESS
    else:
        kwargs["default"] = False
    parser.add_argument(
        "-v",
        "--verbose",
        **kwargs,
    )


def _add_config_option(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--config",
        default=".",
        help="Path to .cssloader.yml or the directory containing it.",
    )


def _add_audience_option(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--audience",
        required=True,
        help="Audience whose stylesheets should be used (e.g. staff, client).",
    )


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="cssloader",
        description="Discover audience-specific stylesheets and inject them into HTML pages.",
    )
    _add_verbose_option(parser)
    parser.add_argument(
        "--log-file",
        type=Path,
        default=None,
        help="Also write log records to this file.",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    list_parser = subparsers.add_parser(
        "list",
        help="Show discovered stylesheets grouped by audience.",
    )
    _add_verbose_option(list_parser, suppress_default=True)
    _add_config_option(list_parser)

    render_parser = subparsers.add_parser(
        "render",
        help="Print the link tags for an audience.",
    )
    _add_verbose_option(render_parser, suppress_default=True)
    _add_config_option(render_parser)
    _add_audience_option(render_parser)

    inject_parser = subparsers.add_parser(
        "inject",
        help="Inject link tags into an HTML file.",
    )
    _add_verbose_option(inject_parser, suppress_default=True)
    _add_config_option(inject_parser)
    _add_audience_option(inject_parser)
    inject_parser.add_argument("file", help="HTML file to process.")
    inject_parser.add_argument(
        "--in-place",
        action="store_true",
        help="Rewrite the file instead of printing the result.",
    )

    install_parser = subparsers.add_parser(
        "install",
        help="Create the stylesheet directory, seed demo files and record the version.",
    )
    _add_verbose_option(install_parser, suppress_default=True)
    _add_config_option(install_parser)

    serve_parser = subparsers.add_parser(
        "serve",
        help="Run the preview service.",
    )
    _add_verbose_option(serve_parser, suppress_default=True)
    _add_config_option(serve_parser)
    serve_parser.add_argument("--host", default="127.0.0.1", help="Interface to bind.")
    serve_parser.add_argument("--port", type=int, default=8000, help="Port to bind.")

    return parser


def main(argv: list[str] | None = None) -> None:
    """CLI entrypoint for cssloader commands."""
    parser = _build_parser()
    args = parser.parse_args(argv)

    configure_logging(verbose=bool(args.verbose), log_file=args.log_file)

    config_path = Path(args.config)
    try:
        config = load_config(config_path)
    except ConfigError as exc:
        parser.exit(1, f"{exc}\n")

    if args.command == "list":
        _print_classification(config)
    elif args.command == "render":
        orchestrator = _prepare(config, args.audience)
        for tag in orchestrator.pending_links:
            print(tag)
    elif args.command == "inject":
        target = Path(args.file)
        try:
            html = target.read_text(encoding="utf-8")
        except OSError as exc:
            parser.exit(1, f"Cannot read {target}: {exc}\n")
        result = _prepare(config, args.audience).inject_into_buffer(html)
        if args.in_place:
            target.write_text(result, encoding="utf-8")
        else:
            sys.stdout.write(result)
    elif args.command == "install":
        copied = enable(config, config_path=config_path)
        print(f"CSS directory ready at {_relativize(config.css_directory)}")
        for name in copied:
            print(f"Copied demo file {name}")
    elif args.command == "serve":  # pragma: no cover - integration path
        from .service import run_service

        check_version(config, config_path=config_path)
        run_service(config, host=args.host, port=args.port)
    else:  # pragma: no cover - argparse enforces choices
        parser.exit(1, "Unknown command\n")


def _prepare(config: LoaderConfig, audience: str) -> CssLoaderOrchestrator:
    orchestrator = CssLoaderOrchestrator.from_config(config, FixedContextDetector(audience))
    orchestrator.prepare()
    return orchestrator


def _print_classification(config: LoaderConfig) -> None:
    discovery = FilesystemCssDiscovery(config.css_directory, dict(config.compiled_patterns()))
    for audience, files in discovery.discover().items():
        print(f"{audience}:")
        if not files:
            print("  (none)")
        for css_file in files:
            print(f"  {css_file.filename} (mtime {css_file.mtime})")


def _relativize(path: Path) -> str:
    try:
        return str(path.relative_to(Path.cwd()))
    except ValueError:
        return str(path)


if __name__ == "__main__":
    main(sys.argv[1:])
