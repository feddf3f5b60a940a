from __future__ import annotations

import asyncio
import logging
import sys
from typing import List, Optional

from pagelens.core.handlers.analyze_handler import handle_analyze
from pagelens.core.managers.config_manager import config_manager
from pagelens.core.utils.configure_logging import configure_logger

logger = logging.getLogger(__name__)


def _setup_windows_event_loop_if_needed() -> None:
    """Installs Windows compatible asyncio policy if possible."""
    if not sys.platform.startswith("win"):
        return
    try:
        asyncio.set_event_loop_policy(asyncio.WindowsSelectorEventLoopPolicy())
        logger.debug("Using WindowsSelectorEventLoopPolicy for asyncio on Windows.")
    except AttributeError as exc:  # pragma: no cover
        logger.warning("Could not set WindowsSelectorEventLoopPolicy: %s", exc)


def main(argv: Optional[List[str]] = None) -> int:
    """Console entry point: `pagelens <url> [<url> ...]`."""
    configure_logger(
        config_manager.get_nested("debug.level", "INFO"),
        module_specific_levels=config_manager.get_nested("debug.module_levels", {}),
        silenced_loggers=config_manager.get_nested("debug.silenced", {})
    )
    _setup_windows_event_loop_if_needed()

    args = list(sys.argv[1:] if argv is None else argv)
    try:
        return handle_analyze(args)
    except KeyboardInterrupt:
        print("\nInterrupted.")
        return 130


if __name__ == "__main__":
    sys.exit(main())
