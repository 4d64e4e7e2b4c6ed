"""Runtime boot helpers for the Prompt Vault CLI.

Updates:
  v0.1.1 - 2026-10-17 - Apply --verbose on top of file-based logging configuration.
  v0.1.0 - 2026-10-15 - Extract logging configuration helpers.
"""

from __future__ import annotations

import logging
import logging.config
from pathlib import Path

DEFAULT_LOGGING_CONFIG = Path("config/logging.conf")
LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def setup_logging(logging_conf_path: Path | None, *, verbose: bool = False) -> None:
    """Configure logging using *logging_conf_path* when available."""
    path = logging_conf_path or DEFAULT_LOGGING_CONFIG
    if path.exists():
        try:
            logging.config.fileConfig(path, disable_existing_loggers=False)
        except (OSError, ValueError, KeyError) as exc:
            logging.basicConfig(level=logging.INFO, format=LOG_FORMAT)
            logging.getLogger("prompt_vault.cli").warning(
                "Ignoring invalid logging config %s: %s", path, exc
            )
    else:
        logging.basicConfig(level=logging.DEBUG if verbose else logging.WARNING, format=LOG_FORMAT)
    if verbose:
        logging.getLogger("prompt_vault").setLevel(logging.DEBUG)
