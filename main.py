"""Application entry point for Prompt Vault.

Updates:
  v0.2.0 - 2026-10-16 - Print library statistics when no command is given.
  v0.1.0 - 2026-10-15 - Wire settings, vault construction, and CLI commands.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from typing import TYPE_CHECKING

from cli.commands import COMMAND_SPECS, run_stats
from cli.parser import parse_args
from cli.runtime import setup_logging
from cli.settings_summary import print_settings_summary
from config import SettingsError, load_settings
from core import PromptVaultError, build_prompt_vault

if TYPE_CHECKING:  # pragma: no cover - typing helpers
    from config import PromptVaultSettings
    from core.prompt_vault import PromptVault

EXIT_SETTINGS = 2
EXIT_STORAGE = 3


def _initialise_vault(
    settings: PromptVaultSettings,
    logger: logging.Logger,
) -> PromptVault | None:
    try:
        return build_prompt_vault(settings)
    except PromptVaultError as exc:
        logger.error("Failed to open prompt vault: %s", exc)
        return None


def main(argv: Sequence[str] | None = None) -> int:
    """Entrypoint that wires settings, the vault, and CLI commands."""
    args = parse_args(argv)
    setup_logging(args.logging_config, verbose=args.verbose)

    logger = logging.getLogger("prompt_vault.main")
    try:
        settings = load_settings()
    except SettingsError as exc:
        cause = f" ({exc.__cause__})" if exc.__cause__ else ""
        logger.error("Failed to load settings: %s%s", exc, cause)
        return EXIT_SETTINGS

    if args.print_settings:
        print_settings_summary(settings)
        return 0

    command = getattr(args, "command", None)
    spec = COMMAND_SPECS.get(command)
    vault = _initialise_vault(settings, logger)
    if vault is None:
        return EXIT_STORAGE
    try:
        if spec is not None:
            return spec.handler(vault, args, logger, settings)
        return run_stats(vault, args, logger, settings)
    except PromptVaultError as exc:
        logger.error("Command failed: %s", exc)
        return EXIT_STORAGE


if __name__ == "__main__":
    raise SystemExit(main())
