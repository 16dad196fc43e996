"""Main entry point for the tenprint API server."""

import asyncio
import signal
from pathlib import Path

import structlog
import uvicorn

from tenprint.api.gateway import create_app
from tenprint.config.loader import load_config
from tenprint.config.models import TenPrintServiceConfig
from tenprint.log import configure_logging

logger = structlog.get_logger()


class TenPrintServer:
    """Runs the tenprint API under uvicorn.

    Responsible for:
    - Loading configuration (or using defaults when no file is given)
    - Configuring logging
    - Building the FastAPI app and serving it
    """

    def __init__(self, config_path: Path | None = None) -> None:
        """Initialize the server.

        Args:
            config_path: Path to configuration file, or None for defaults.
        """
        self.config_path = config_path
        self.config = (
            load_config(config_path) if config_path is not None else TenPrintServiceConfig()
        )
        configure_logging(self.config.logging)
        self.logger = logger.bind(component="tenprint_server")
        self.app = create_app(self.config)
        self._server: uvicorn.Server | None = None

    def _handle_signal(self, signum: int, frame: object) -> None:
        """Handle shutdown signals.

        Args:
            signum: Signal number.
            frame: Current stack frame.
        """
        self.logger.info("received_shutdown_signal", signal=signum)
        if self._server is not None:
            self._server.should_exit = True

    async def run(self) -> None:
        """Serve until shutdown."""
        config = uvicorn.Config(
            self.app,
            host=self.config.api.host,
            port=self.config.api.port,
            workers=self.config.api.workers,
            log_level=self.config.logging.level.lower(),
        )
        self._server = uvicorn.Server(config)

        signal.signal(signal.SIGTERM, self._handle_signal)

        self.logger.info(
            "api_server_starting",
            host=self.config.api.host,
            port=self.config.api.port,
            config_path=str(self.config_path) if self.config_path else None,
        )

        try:
            await self._server.serve()
        except Exception:
            self.logger.exception("api_server_error")
            raise
        finally:
            self.logger.info("api_server_stopped")


async def main(config_path: Path | None = None) -> None:
    """Main entry point.

    Args:
        config_path: Path to configuration file. Defaults are used when None.
    """
    server = TenPrintServer(config_path)
    await server.run()


if __name__ == "__main__":
    import argparse

    parser = argparse.ArgumentParser(description="tenprint pattern API server")
    parser.add_argument(
        "--config",
        type=Path,
        default=None,
        help="Path to configuration file",
    )

    args = parser.parse_args()

    asyncio.run(main(args.config))
