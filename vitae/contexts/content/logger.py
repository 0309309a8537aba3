"""
Content context logger.

Provides logging interface for content context with automatic [content] prefix.
All content modules should import from this module, not from utils.logger directly.
"""

from pathlib import Path

from loguru import logger

from vitae.utils.logger import setup_logger as _setup_logger

CONTEXT_PREFIX = "[content]"


def setup_content_logger(log_dir: Path, settings=None, verbose: bool = False) -> Path:
    """
    Setup logger for content context.

    Args:
        log_dir: Directory for this session
        settings: SiteSettings whose paths and locales go in the log header
        verbose: Also show debug messages (fallbacks, loaded collections) on the console

    Returns:
        Path to log file
    """
    return _setup_logger(context_name="content", log_dir=log_dir, settings=settings, verbose=verbose)


# Wrapper functions with automatic [content] prefix


def _log_error(message: str) -> None:
    """Log error message with [content] prefix."""
    logger.error(f"{CONTEXT_PREFIX} {message}")


def _log_warning(message: str) -> None:
    """Log warning message with [content] prefix."""
    logger.warning(f"{CONTEXT_PREFIX} {message}")


def _log_debug(message: str) -> None:
    """Log debug message with [content] prefix."""
    logger.debug(f"{CONTEXT_PREFIX} {message}")


# High-level content-specific logging helpers


def log_collection_loaded(collection: str, collection_dir: Path, count: int, locales: set) -> None:
    """Log a collection loaded from disk."""
    translated = f", translations: {sorted(locales)}" if locales else ""
    _log_debug(f"Loaded {count} record(s) from {collection_dir}{translated}")


def log_collection_missing(collection: str, collection_dir: Path) -> None:
    """Log a collection with no directory on disk."""
    _log_debug(f"No directory for collection '{collection}' at {collection_dir}")


def log_skipped_file(path: Path, reason: str) -> None:
    """Log a file ignored while loading a collection."""
    _log_warning(f"Skipping {path}: {reason}")


def log_entry_resolved(collection: str, slug: str, locale: str) -> None:
    """Log the record a lookup resolved to."""
    _log_debug(f"Resolved {collection}/{slug} for locale '{locale}'")


def log_entry_fallback(collection: str, id: str, locale: str) -> None:
    """Log a lookup that fell back to the primary-locale record."""
    _log_debug(f"No '{locale}' translation for {collection}/{id}, using primary record")


def log_entry_missing(collection: str, id: str, locale: str) -> None:
    """Log a lookup that found nothing."""
    _log_error(f"Missing entry {collection}/{id} (locale: {locale})")
