# ABOUTME: Entry point for the battle guide: terminal mode by default, browser mode with --web.
# ABOUTME: Run with: python -m battle_guide.interface [--web [PORT]]

import argparse
import sys

from loguru import logger

from battle_guide.config.settings import get_settings
from battle_guide.interface.guide_cli import GuideCommandLineInterface
from battle_guide.missions.loader import load_mission_catalog
from battle_guide.utils.logging import setup_logging


def build_parser(default_port: int) -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="battle-guide",
        description="Step-by-step guide through a Warhammer 40,000 battle",
    )
    parser.add_argument(
        "--web", "-w",
        nargs="?",
        type=int,
        const=default_port,
        default=None,
        metavar="PORT",
        help=f"Serve the guide in a browser (default port: {default_port})",
    )
    return parser


def main(argv: list[str] | None = None) -> None:
    """Run the guide in the terminal, or serve it over HTTP with --web"""
    settings = get_settings()
    args = build_parser(settings.web_port).parse_args(argv)
    web_mode = args.web is not None

    # The terminal guide owns stdout/stderr; only log to the console when serving or debugging
    setup_logging(
        log_level=settings.log_level,
        log_dir=settings.log_dir,
        console_output=web_mode or settings.log_level.upper() == "DEBUG",
        file_output=settings.log_to_file,
    )

    catalog = load_mission_catalog(settings)

    if web_mode:
        import uvicorn

        from battle_guide.web.app import create_app

        logger.info(f"Starting web guide on http://{settings.web_host}:{args.web}")
        uvicorn.run(create_app(settings=settings, catalog=catalog), host=settings.web_host, port=args.web)
        return

    cli = GuideCommandLineInterface(catalog=catalog)
    print(cli.formatter.format_catalog_summary(catalog))

    try:
        cli.run()
    except KeyboardInterrupt:
        print("\nExiting game guide. Thanks for playing!")
    except Exception as e:
        print(f"\nFatal error: {e}")
        logger.exception("Fatal error in CLI")
        sys.exit(1)


if __name__ == "__main__":
    main()
