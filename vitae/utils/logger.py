"""
Logging setup for vitae scripts.

Library modules only emit through their context's logger.py; handlers are
configured once per script run here. Each run gets its own log directory with
a header recording what produced it: the command, the package versions and,
when known, the site settings the run used.
"""

import sys
from pathlib import Path
from typing import Dict

import babel
from loguru import logger

import vitae

LOG_FORMAT = "{time:YYYY-MM-DD HH:mm:ss} | {level: <7} | {message}"
CONSOLE_FORMAT = "{time:HH:mm:ss} | <level>{level: <7}</level> | <level>{message}</level>"

LEVEL_COLORS = {
    "DEBUG": "<dim>",
    "WARNING": "<yellow>",
    "ERROR": "<red>",
}


def setup_logger(context_name: str, log_dir: Path, settings=None, verbose: bool = False) -> Path:
    """
    Send loguru output to `<log_dir>/<context_name>.log` and the console.

    The file always records DEBUG and above; the console shows INFO and above,
    or everything when `verbose` is set.

    Args:
        context_name: Context identifier, used as the log file name ("content")
        log_dir: Directory for this run
        settings: SiteSettings the run uses, recorded in the header if given
        verbose: Echo DEBUG messages to the console

    Returns:
        Path to log file
    """
    log_dir.mkdir(exist_ok=True, parents=True)
    log_file = log_dir / f"{context_name}.log"

    logger.remove()
    for level_name, color in LEVEL_COLORS.items():
        logger.level(level_name, color=color)

    logger.add(log_file, format=LOG_FORMAT, level="DEBUG", encoding="utf-8")
    logger.add(
        sys.stdout,
        format=CONSOLE_FORMAT,
        level="DEBUG" if verbose else "INFO",
        colorize=True,
    )

    log_provenance(settings)

    return log_file


def provenance(settings=None) -> Dict[str, str]:
    """Header fields describing the current run, in display order."""
    fields = {
        "Command": " ".join(sys.argv),
        "Working directory": str(Path.cwd()),
        "vitae": vitae.__version__,
        "Babel": babel.__version__,
        "Python": sys.version.split()[0],
    }

    if settings is not None:
        fields.update(
            {
                "Site settings": str(settings.config_path or "built-in defaults"),
                "Content path": str(settings.content_path),
                "Locales path": str(settings.locales_path),
                "Locales": f"{settings.locales.primary} (primary), "
                + ", ".join(settings.locales.supported),
            }
        )

    return fields


def log_provenance(settings=None) -> None:
    """Write the run header to every configured handler."""
    logger.info("=" * 80)
    for key, value in provenance(settings).items():
        logger.info(f"{key}: {value}")
    logger.info("=" * 80)
