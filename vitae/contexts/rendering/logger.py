"""
Rendering context logger.

Provides logging interface for rendering context with automatic [render] prefix.
All rendering modules should import from this module, not from utils.logger directly.
"""

from pathlib import Path

from loguru import logger

CONTEXT_PREFIX = "[render]"


# Wrapper functions with automatic [render] prefix


def _log_error(message: str) -> None:
    """Log error message with [render] prefix."""
    logger.error(f"{CONTEXT_PREFIX} {message}")


def _log_warning(message: str) -> None:
    """Log warning message with [render] prefix."""
    logger.warning(f"{CONTEXT_PREFIX} {message}")


def _log_debug(message: str) -> None:
    """Log debug message with [render] prefix."""
    logger.debug(f"{CONTEXT_PREFIX} {message}")


# High-level rendering-specific logging helpers


def log_render_start(page_path: str, locale: str, date_format: str) -> None:
    """Log start of a page render with its context."""
    _log_debug(f"Rendering {page_path} (locale: {locale}, date format: '{date_format}')")


def log_render_end(page_path: str, failed: bool = False) -> None:
    """Log end of a page render."""
    if failed:
        _log_error(f"Render of {page_path} aborted")
    else:
        _log_debug(f"Finished rendering {page_path}")


def log_settings_loaded(config_path: Path, primary: str, supported: list) -> None:
    """Log which site settings are active."""
    source = config_path if config_path else "built-in defaults"
    _log_debug(f"Site settings loaded from {source} (primary: {primary}, supported: {supported})")


def log_missing_catalog(catalog_path: Path) -> None:
    """Log a translation catalog that does not exist on disk."""
    _log_warning(f"Translation catalog not found: {catalog_path} (keys will render as-is)")


def log_missing_translation(key: str, locale: str) -> None:
    """Log a translation key with no value in any catalog."""
    _log_debug(f"Missing translation for '{key}' (locale: {locale})")
