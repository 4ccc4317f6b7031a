"""CLI entrypoints for readmegen commands."""

from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path

from .config import ConfigError
from .fs import ScanError
from .logging import configure_logging
from .pipeline import Scaffolder


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


def _add_quiet_option(
    parser: argparse.ArgumentParser, *, suppress_default: bool = False
) -> None:
    parser.add_argument(
        "-q",
        "--quiet",
        action="store_true",
        default=argparse.SUPPRESS if suppress_default else False,
        help="Only log warnings and errors.",
    )


def _add_project_options(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "path",
        nargs="?",
        default=".",
        help="Path to the project root (defaults to current directory).",
    )
    parser.add_argument(
        "--name",
        default=None,
        help="Project name (auto-detected from manifest or directory if omitted).",
    )
    parser.add_argument(
        "--description",
        default=None,
        help="One-line project description (auto-detected if omitted).",
    )


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="readmegen",
        description="Scaffold a minimalist README from a project's manifests.",
    )
    _add_verbose_option(parser)
    _add_quiet_option(parser)
    subparsers = parser.add_subparsers(dest="command", required=True)

    scaffold_parser = subparsers.add_parser(
        "scaffold",
        help="Print (or write) a README scaffold for a project.",
    )
    _add_verbose_option(scaffold_parser, suppress_default=True)
    _add_quiet_option(scaffold_parser, suppress_default=True)
    _add_project_options(scaffold_parser)
    scaffold_parser.add_argument(
        "--write",
        action="store_true",
        help="Write the README into the project root instead of printing it.",
    )
    scaffold_parser.add_argument(
        "--force",
        action="store_true",
        help="Overwrite an existing README when used with --write.",
    )
    scaffold_parser.add_argument(
        "--fallback",
        action="store_true",
        help=(
            "Print a minimal README from the directory name if the project cannot be read "
            "(not allowed with --write)."
        ),
    )

    inspect_parser = subparsers.add_parser(
        "inspect",
        help="Print the detected project profile as JSON.",
    )
    _add_verbose_option(inspect_parser, suppress_default=True)
    _add_quiet_option(inspect_parser, suppress_default=True)
    _add_project_options(inspect_parser)

    serve_parser = subparsers.add_parser(
        "serve",
        help="Run the HTTP service.",
    )
    _add_verbose_option(serve_parser, suppress_default=True)
    _add_quiet_option(serve_parser, suppress_default=True)
    serve_parser.add_argument("--host", default="127.0.0.1", help="Interface to bind.")
    serve_parser.add_argument("--port", type=int, default=8000, help="Port to listen on.")

    return parser


def main(argv: list[str] | None = None) -> None:
    """CLI entrypoint for readmegen commands."""
    parser = _build_parser()
    args = parser.parse_args(argv)

    if args.command == "scaffold" and args.write and args.fallback:
        parser.error("--fallback cannot be combined with --write")

    configure_logging(verbose=bool(args.verbose), quiet=bool(args.quiet))

    if args.command == "serve":
        from .service import run_service

        run_service(host=args.host, port=args.port)
        return

    scaffolder = Scaffolder()

    try:
        if args.command == "scaffold":
            if args.write:
                readme_path = scaffolder.write(
                    args.path,
                    name=args.name,
                    description=args.description,
                    force=bool(args.force),
                )
                print(f"README created at {_relativize(readme_path)}")
            else:
                markdown = scaffolder.render(
                    args.path,
                    name=args.name,
                    description=args.description,
                    fallback=bool(args.fallback),
                )
                sys.stdout.write(markdown)
        elif args.command == "inspect":
            outcome = scaffolder.build_profile(
                args.path, name=args.name, description=args.description
            )
            print(json.dumps(outcome.profile.to_dict(), indent=2))
        else:  # pragma: no cover - argparse enforces choices
            parser.exit(1, "Unknown command\n")
    except (ScanError, ConfigError, FileExistsError) as exc:
        parser.exit(1, f"{exc}\n")
    except ValueError as exc:
        parser.exit(1, f"readmegen {args.command} failed: {exc}\n")


def _relativize(path: Path) -> str:
    try:
        return str(path.relative_to(Path.cwd()))
    except ValueError:
        return str(path)


if __name__ == "__main__":
    main(sys.argv[1:])
