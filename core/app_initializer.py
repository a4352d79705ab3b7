"""Application initialization orchestrator."""

from __future__ import annotations

import asyncio
from typing import Optional

from flask import Flask

from config import Config, load_config
from core.logger import get_logger

logger = get_logger(__name__)


class ApplicationInitializer:
    """Prepares the store, builds the Flask app and serves it."""

    def __init__(self, config: Optional[Config] = None):
        self.config = config or load_config()
        self.app: Optional[Flask] = None

    def initialize(self) -> Flask:
        """Create the web app, then migrate and seed the database."""
        from web.app import create_app

        self.app = create_app(self.config)
        asyncio.run(self._prepare_database())
        return self.app

    async def _prepare_database(self) -> None:
        from database import run_migrations

        await run_migrations()

        config_service = self.app.config["BUSINESS_CONFIG_SERVICE"]
        await config_service.get_or_create()

        if self.config.seed_prizes:
            await self.app.config["PRIZE_CATALOG"].seed_if_empty()

    def run(self) -> None:
        """Serve the app with the Flask server."""
        if self.app is None:
            self.initialize()
        logger.info(
            "🚀 Server at http://%s:%d (%s)",
            self.config.web_host,
            self.config.web_port,
            self.config.environment,
        )
        self.app.run(host=self.config.web_host, port=self.config.web_port, debug=self.config.debug)
