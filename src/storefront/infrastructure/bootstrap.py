"""Composition root: wires concrete implementations to domain interfaces.

This is the only place in the codebase that knows about *all* layers.
Configuration comes from the environment and can be overridden by the CLI:

* ``STOREFRONT_DATA_DIR``: directory holding ``storefront.json``
  (default: ``data/`` at the repo root).
* ``STOREFRONT_LOG_LEVEL``: logging level name (default ``WARNING``).
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from pathlib import Path

from storefront.domain.repository.unit_of_work import UnitOfWork
from storefront.domain.service.order_notifier import OrderNotifier
from storefront.infrastructure.notification.logging_notifier import (
    LoggingOrderNotifier,
)
from storefront.infrastructure.persistence.json_unit_of_work import JsonUnitOfWork

# When installed in editable mode the project root is the repo root.
_DEFAULT_DATA_DIR = Path(__file__).resolve().parents[3] / "data"

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


@dataclass(frozen=True)
class Settings:
    data_dir: Path = _DEFAULT_DATA_DIR
    log_level: str = "WARNING"

    @staticmethod
    def from_env(
        data_dir: str | Path | None = None,
        log_level: str | None = None,
    ) -> Settings:
        """Build settings; explicit arguments beat the environment."""
        return Settings(
            data_dir=Path(
                data_dir or os.environ.get("STOREFRONT_DATA_DIR") or _DEFAULT_DATA_DIR
            ),
            log_level=(
                log_level or os.environ.get("STOREFRONT_LOG_LEVEL") or "WARNING"
            ).upper(),
        )


def configure_logging(settings: Settings) -> None:
    logging.basicConfig(level=settings.log_level, format=LOG_FORMAT)


def unit_of_work(settings: Settings) -> UnitOfWork:
    return JsonUnitOfWork(settings.data_dir)


def notifier() -> OrderNotifier:
    return LoggingOrderNotifier()
