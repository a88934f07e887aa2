"""
Main entry point for the game.

Loads .env, configures logging and runs the window loop.
"""

import argparse
import asyncio
import logging
import sys

from dotenv import load_dotenv


def setup_logging(debug: bool = False) -> None:
    """Configure logging."""
    level = logging.DEBUG if debug else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%H:%M:%S"
    )


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(prog="flappy", description="Flap between the columns.")
    parser.add_argument("--debug", action="store_true", help="verbose logging")
    parser.add_argument("--fps", type=int, default=None, help="override the frame rate")
    return parser.parse_args(argv)


async def run(fps: int | None = None) -> None:
    from flappy.app import FlappyApp
    from flappy.config.settings import get_settings

    settings = get_settings()
    if fps is not None:
        settings.display.fps = fps

    app = FlappyApp(settings)
    await app.run()


def main(argv: list[str] | None = None) -> None:
    """Main entry point."""
    # Load environment variables
    load_dotenv()

    args = parse_args(argv)

    from flappy.config.settings import get_settings
    setup_logging(args.debug or get_settings().debug)

    logger = logging.getLogger(__name__)
    logger.info("Flappy starting...")

    try:
        asyncio.run(run(args.fps))
    except KeyboardInterrupt:
        logger.info("Interrupted by user")
    except Exception as e:
        logger.exception(f"Fatal error: {e}")
        sys.exit(1)

    logger.info("Flappy stopped")


if __name__ == "__main__":
    main()
