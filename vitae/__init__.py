"""
VITAE - localized content layer for a résumé site

Resolves résumé content and formats dates for each page render of a
multi-locale résumé website.

Architecture:
- Rendering Context: per-render configuration (locale, date format, translations)
  and locale-aware date formatting
- Content Context: content collections on disk and locale-fallback entry resolution
"""

__version__ = "0.1.0"
