"""Command line interface for appgen.

Usage::

    appgen new my-blog
    appgen new my-app --with-simple-form
    appgen new my-app --rails-port 3001 --vite-port 5174
    appgen new my-app --skip-docker --locale it
    appgen check
    appgen version
"""

from __future__ import annotations

import argparse
import asyncio
from typing import Sequence

from . import __version__
from .config import SUPPORTED_LOCALES, Configuration, Defaults
from .dependency_checker import DependencyChecker
from .errors import AppgenError, ConfigurationError, DependencyError
from .pipeline import AppGenerator
from .utils import console, print_error, print_success, print_warning


def build_parser(defaults: Defaults | None = None) -> argparse.ArgumentParser:
    defaults = defaults or Defaults.from_env()

    parser = argparse.ArgumentParser(
        prog="appgen",
        description="Generate a new Rails 8 application with an opinionated stack",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=(
            "Examples:\n"
            "  appgen new my-blog\n"
            "  appgen new my-app --with-simple-form\n"
            "  appgen new my-app --rails-port 3001 --vite-port 5174\n"
            "  appgen new my-app --skip-docker --locale it\n"
        ),
    )
    parser.add_argument(
        "-v", "--version",
        action="store_true",
        help="Show appgen version",
    )
    subparsers = parser.add_subparsers(dest="command")

    new_parser = subparsers.add_parser("new", help="generate a new Rails application")
    new_parser.add_argument("app_name", help="Name of the application directory")
    new_parser.add_argument(
        "--with-simple-form",
        action="store_true",
        help="Include SimpleForm with Tailwind CSS styling",
    )
    new_parser.add_argument(
        "--rails-port",
        type=int,
        default=defaults.rails_port,
        help=f"Rails server port (default: {defaults.rails_port})",
    )
    new_parser.add_argument(
        "--vite-port",
        type=int,
        default=defaults.vite_port,
        help=f"Vite dev server port (default: {defaults.vite_port})",
    )
    new_parser.add_argument(
        "--skip-docker",
        action="store_true",
        help="Skip Docker configuration",
    )
    new_parser.add_argument(
        "--locale",
        default=defaults.locale,
        help=f"Default locale ({', '.join(SUPPORTED_LOCALES)})",
    )

    subparsers.add_parser("check", help="verify that all required dependencies are installed")
    subparsers.add_parser("version", help="show appgen version")

    return parser


def _handle_new(args: argparse.Namespace) -> int:
    try:
        config = Configuration(
            app_name=args.app_name,
            rails_port=args.rails_port,
            vite_port=args.vite_port,
            locale=args.locale,
            with_simple_form=args.with_simple_form,
            skip_docker=args.skip_docker,
        )
    except ConfigurationError as exc:
        print_error(f"Error: {exc}")
        return 1

    generator = AppGenerator(config)
    try:
        asyncio.run(generator.run())
    except DependencyError as exc:
        print_error("\nMissing required dependencies:")
        for name in exc.missing:
            print_error(f"  - {name}")
        print_warning("\nPlease install the missing dependencies and try again.")
        return 1
    except AppgenError as exc:
        print_error(f"Error: {exc}")
        return 1

    print_success(f"\nApplication '{config.app_name}' created successfully!")
    console.print("\n[cyan]Next steps:[/cyan]")
    for step in generator.next_steps():
        console.print(f"  {step}")

    warning = generator.locale_warning()
    if warning:
        print_warning(f"\n{warning}")

    console.print("\n[cyan]Happy coding![/cyan]")
    return 0


def _handle_check() -> int:
    console.print("\n[cyan]Checking dependencies...[/cyan]\n")
    checker = DependencyChecker()
    ok = asyncio.run(checker.check_all(verbose=True))
    return 0 if ok else 1


def _handle_version() -> int:
    console.print(f"appgen v{__version__}")
    return 0


def main(argv: Sequence[str] | None = None) -> int:
    try:
        parser = build_parser()
    except ConfigurationError as exc:
        print_error(f"Error: {exc}")
        return 1
    args = parser.parse_args(argv)

    if args.version or args.command == "version":
        return _handle_version()
    if args.command == "new":
        return _handle_new(args)
    if args.command == "check":
        return _handle_check()
    parser.print_help()
    return 1


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
