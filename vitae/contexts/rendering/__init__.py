"""
Rendering Context

Responsibilities:
- Loads site settings (locales, date formats, content and catalog paths)
- Builds the immutable RenderContext for each page render and attaches it to the render handle
- Formats dates for the active locale without shifting date-only values across timezones
- Provides the translation function of the active locale

Owns: RenderContext lifecycle, site settings, translation catalogs, date formatting
Never: Decides which content record a page shows
"""

from vitae.contexts.rendering.date_format import (
    format_date,
    format_date_for,
    is_midnight_utc,
    normalize_date_only,
)
from vitae.contexts.rendering.exceptions import ConfigurationError
from vitae.contexts.rendering.i18n import Translator
from vitae.contexts.rendering.render_context import (
    PageRender,
    RenderContext,
    create_render_context,
    get_global_context,
    get_translation,
    render_page,
)
from vitae.contexts.rendering.settings import (
    LocaleSettings,
    SiteSettings,
    get_site_settings,
    load_site_settings,
)

__all__ = [
    # Render context store
    "RenderContext",
    "PageRender",
    "create_render_context",
    "get_global_context",
    "get_translation",
    "render_page",
    # Date formatting
    "format_date",
    "format_date_for",
    "is_midnight_utc",
    "normalize_date_only",
    # Configuration
    "LocaleSettings",
    "SiteSettings",
    "get_site_settings",
    "load_site_settings",
    "Translator",
    "ConfigurationError",
]
