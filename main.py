"""Application entry point."""

from __future__ import annotations

import sys
from pathlib import Path

from config import load_config
from core import setup_logger, ApplicationInitializer


def main() -> int:
    config = load_config()
    logger = setup_logger(
        name="",
        level=config.log_level,
        log_file=str(Path(config.log_folder) / "prizewheel.log"),
        colored=True,
    )

    try:
        ApplicationInitializer(config).run()
    except KeyboardInterrupt:
        logger.info("Application stopped by user")
    except Exception as e:
        logger.error(f"Application failed: {e}", exc_info=True)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
