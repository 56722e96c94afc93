"""Configuration document loading."""

import json
import logging
from pathlib import Path

from lunaveil.config.model import Config

logger = logging.getLogger(__name__)


def load_config(path: str | Path) -> Config:
    """Read a JSON configuration document."""
    path = Path(path)
    document = json.loads(path.read_text(encoding="utf-8"))
    if not isinstance(document, dict):
        raise ValueError(f"{path}: configuration document must be a JSON object")
    config = Config.from_document(document)
    logger.debug("Loaded configuration from %s with %d steps", path, len(config.steps))
    return config
