"""Run the draft room server.

Usage:
    python -m src.server.run_server [player_pool_file]

Examples:
    python -m src.server.run_server
    PORT=8080 python -m src.server.run_server data/players.json
"""

import logging
import sys
from pathlib import Path

import uvicorn

from src.logging_config import setup_logging
from src.player_pool.loader import PoolLoadError, load_item_pool
from src.server import config
from src.server.app import create_app

logger = logging.getLogger(__name__)


def main(argv=None) -> int:
    argv = sys.argv[1:] if argv is None else argv
    setup_logging(config.LOG_LEVEL, config.LOG_DIR)

    pool_file = Path(argv[0]) if argv else config.POOL_FILE
    try:
        pool = load_item_pool(pool_file)
    except PoolLoadError as e:
        logger.error("Error loading player pool: %s", e)
        return 1

    app = create_app(
        pool,
        results_dir=config.RESULTS_OUTPUT_DIR,
        cors_origins=config.get_cors_origins(),
    )

    logger.info("Server running on http://localhost:%d", config.PORT)
    uvicorn.run(app, host=config.HOST, port=config.PORT, log_level=config.LOG_LEVEL.lower())
    return 0


if __name__ == "__main__":
    sys.exit(main())
