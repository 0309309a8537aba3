"""
Shared utilities for VITAE.

Common functionality used across contexts:
- Logger setup with a per-run provenance header
"""

from vitae.utils.logger import log_provenance, provenance, setup_logger

__all__ = ["log_provenance", "provenance", "setup_logger"]
