"""
DH Lotto — Application Entrypoint

Configures structlog, checks credentials, opens the browser session and runs
the purchase sequence once.

Run via:
    python -m dhlotto.main
    dhlotto
"""

from __future__ import annotations

import asyncio
import logging
import sys

import structlog

from dhlotto import __version__
from dhlotto.browser.session import open_browser_session
from dhlotto.config import Settings, load_credentials, settings
from dhlotto.purchase import PurchaseResult
from dhlotto.purchase.runner import PurchaseRunner


# ---------------------------------------------------------------------------
# Structlog Configuration
# ---------------------------------------------------------------------------


def configure_logging(log_level: str = "INFO", json_output: bool = True) -> None:
    """
    Set up structured logging.

    Args:
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR).
        json_output: JSON lines when True, human-readable console output otherwise.
    """
    # Configure stdlib logging first (for third-party libraries)
    logging.basicConfig(
        format="%(message)s",
        stream=sys.stdout,
        level=getattr(logging, log_level.upper()),
    )

    renderer = structlog.processors.JSONRenderer(ensure_ascii=False) if json_output else structlog.dev.ConsoleRenderer()

    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso", utc=True),
            renderer,
        ],
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )


# ---------------------------------------------------------------------------
# Purchase Run
# ---------------------------------------------------------------------------


async def run(config: Settings | None = None) -> PurchaseResult:
    """
    Check credentials, then run one purchase inside a fresh browser session.

    Credentials are checked before the browser is launched, so missing
    configuration exits without touching the browser.
    """
    config = config or settings
    logger = structlog.get_logger(__name__)

    logger.info("dhlotto_start", version=__version__, environment="ci" if config.is_ci else "local")
    credentials = load_credentials(config)

    async with open_browser_session(config) as session:
        result = await PurchaseRunner(session, credentials, config).run()

    logger.info(
        "dhlotto_finished",
        outcome=result.outcome.value,
        balance=result.balance,
    )
    return result


def main(config: Settings | None = None) -> int:
    """
    Run the purchase and map the result to a process exit code.

    Returns:
        0 for every PurchaseOutcome, 1 for any failure.
    """
    config = config or settings
    configure_logging(log_level=config.LOG_LEVEL, json_output=config.LOG_JSON)
    logger = structlog.get_logger(__name__)

    try:
        asyncio.run(run(config))
    except KeyboardInterrupt:
        logger.info("dhlotto_interrupted_by_user")
        return 1
    except Exception as e:
        logger.error(
            "dhlotto_fatal_error",
            error=str(e),
            error_type=type(e).__name__,
        )
        return 1
    return 0


# ---------------------------------------------------------------------------
# CLI Entry
# ---------------------------------------------------------------------------


def cli() -> None:
    sys.exit(main())


if __name__ == "__main__":
    cli()
