from __future__ import annotations

import logging
import logging.config
from pathlib import Path
from typing import Any, Mapping

import yaml

DEFAULT_FORMAT = "[%(asctime)s] %(levelname)s %(name)s - %(message)s"


def configure_logging(config_path: Path | None = None, level: str = "INFO") -> None:
    """Apply a YAML ``dictConfig`` file, or a basic stderr setup without one."""
    if config_path is None or not config_path.exists():
        if config_path is not None:
            logging.getLogger(__name__).warning(
                "Logging config %s not found; using defaults", config_path
            )
        logging.basicConfig(level=level.upper(), format=DEFAULT_FORMAT)
        return

    with config_path.open("r", encoding="utf-8") as f:
        config: Mapping[str, Any] = yaml.safe_load(f)
    logging.config.dictConfig(dict(config))


def get_logger(name: str) -> logging.Logger:
    return logging.getLogger(name)
