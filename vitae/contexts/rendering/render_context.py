"""
Render Context

Per-page-render configuration (locale, date format, translation function) and
the handle a page render carries it on.

Components that need locale settings take a RenderContext argument directly.
Code that only holds the page handle reads the context back with
get_global_context(); a handle that was never given a context is a wiring
defect and fails loudly.

Usage:
    with render_page("/", "es") as page:
        context = get_global_context(page)
        t = get_translation(page)
        t("sections.experience")
"""

from contextlib import contextmanager
from dataclasses import dataclass, fields
from datetime import tzinfo
from types import MappingProxyType
from typing import Any, Callable, Dict, Iterator, Optional, Tuple

from babel import Locale, UnknownLocaleError

from vitae.contexts.rendering.exceptions import ConfigurationError
from vitae.contexts.rendering.i18n import Translator
from vitae.contexts.rendering.logger import log_render_end, log_render_start
from vitae.contexts.rendering.settings import SiteSettings, get_site_settings

# Key under which the rendering pipeline stores the context in PageRender.locals
CONTEXT_KEY = "context"


@dataclass(frozen=True)
class RenderContext:
    """
    Immutable configuration for a single page render.

    Attributes:
        locale: Babel locale (code plus CLDR formatting rules)
        date_format: LDML date pattern (e.g. "dd/MM/yyyy") or a Babel named
                     format ("short", "medium", "long", "full")
        i18n: Translator for the locale
        primary_locale: Code of the site's primary locale
        fallback_locales: Secondary locales tried after `locale` when resolving content
        timezone: Zone dates are displayed in (None uses the host's local zone)
    """

    locale: Locale
    date_format: str
    i18n: Translator
    primary_locale: str = "en"
    fallback_locales: Tuple[str, ...] = ()
    timezone: Optional[tzinfo] = None

    @property
    def locale_code(self) -> str:
        return str(self.locale)

    @property
    def translate(self) -> Callable[..., str]:
        return self.i18n.t

    @property
    def is_primary(self) -> bool:
        return self.locale_code == self.primary_locale

    def locale_chain(self) -> Tuple[str, ...]:
        """Secondary locales to try, most specific first (empty for the primary locale)."""
        if self.is_primary:
            return ()

        chain = [self.locale_code]
        for locale in self.fallback_locales:
            if locale != self.primary_locale and locale not in chain:
                chain.append(locale)
        return tuple(chain)


CONTEXT_FIELDS = tuple(f.name for f in fields(RenderContext))


class PageRender:
    """
    Handle for one page render.

    The rendering pipeline attaches exactly one RenderContext before any
    component reads it, and detaches it when the render completes.

    Attributes:
        path: Page path being rendered (e.g. "/", "/pdf")
        locals: Render-scoped values set by the pipeline
    """

    def __init__(self, path: str = "/"):
        self.path = path
        self.locals: Dict[str, Any] = {}

    @property
    def has_context(self) -> bool:
        return CONTEXT_KEY in self.locals

    def attach(self, context: RenderContext) -> None:
        if self.has_context:
            raise ConfigurationError("Render context is already attached", page_path=self.path)
        self.locals[CONTEXT_KEY] = context

    def detach(self) -> None:
        self.locals.pop(CONTEXT_KEY, None)

    def __repr__(self) -> str:
        return f"PageRender({self.path!r}, has_context={self.has_context})"


def get_global_context(page: PageRender, *field_names: str):
    """
    Read the render context attached to a page render.

    Args:
        page: Page render handle
        *field_names: Slice of the context to return (e.g. "locale", "date_format").
                      With no names the whole RenderContext is returned.

    Returns:
        The RenderContext, or a read-only mapping of the requested fields

    Raises:
        ConfigurationError: If no RenderContext is attached or a field name is unknown

    Examples:
        >>> get_global_context(page).locale_code
        'es'
        >>> get_global_context(page, "locale", "date_format")["date_format"]
        'dd/MM/yyyy'
    """
    context = page.locals.get(CONTEXT_KEY)

    if context is None:
        raise ConfigurationError(
            "Render context has not been initialized for this render", page_path=page.path
        )
    if not isinstance(context, RenderContext):
        raise ConfigurationError(
            f"Render context must be a RenderContext, got {type(context).__name__}",
            page_path=page.path,
        )

    if not field_names:
        return context

    unknown = [name for name in field_names if name not in CONTEXT_FIELDS]
    if unknown:
        raise ConfigurationError(
            f"Unknown render context field(s) {unknown}. Available: {list(CONTEXT_FIELDS)}",
            page_path=page.path,
        )

    return MappingProxyType({name: getattr(context, name) for name in field_names})


def get_translation(page: PageRender) -> Callable[..., str]:
    """
    Get the translation function of a page render.

    Example:
        >>> t = get_translation(page)
        >>> t("sections.experience")
        'Experiencia'
    """
    return get_global_context(page, "i18n")["i18n"].t


def create_render_context(
    locale: str,
    settings: SiteSettings = None,
    timezone: tzinfo = None,
) -> RenderContext:
    """
    Build the RenderContext for rendering a page in `locale`.

    Args:
        locale: Locale code, must be one of the supported locales
        settings: Site settings (defaults to the process-wide settings)
        timezone: Zone dates are displayed in (defaults to the host's zone)

    Raises:
        ConfigurationError: If the locale is not supported or unknown to Babel
    """
    if settings is None:
        settings = get_site_settings()

    if not settings.locales.is_supported(locale):
        raise ConfigurationError(
            f"Locale '{locale}' is not supported. Supported locales: {list(settings.locales.supported)}"
        )

    try:
        babel_locale = Locale.parse(locale)
    except (UnknownLocaleError, ValueError) as e:
        raise ConfigurationError(f"Unknown locale '{locale}': {e}") from e

    # Content and catalog lookups key on the code as written in the settings
    if str(babel_locale) != locale:
        raise ConfigurationError(
            f"Locale '{locale}' must be written in Babel form ('{babel_locale}') in the site settings"
        )

    chain = settings.locales.fallback_chain(locale)
    translator = Translator.from_catalog_dir(
        settings.locales_path,
        locale,
        fallback_locales=(*chain[1:], settings.locales.primary),
    )

    return RenderContext(
        locale=babel_locale,
        date_format=settings.date_format_for(locale),
        i18n=translator,
        primary_locale=settings.locales.primary,
        fallback_locales=chain[1:],
        timezone=timezone,
    )


@contextmanager
def render_page(
    path: str,
    locale: str,
    settings: SiteSettings = None,
    timezone: tzinfo = None,
) -> Iterator[PageRender]:
    """
    Open a page render with its RenderContext attached.

    The context is detached when the block exits, whether or not it raised.

    Example:
        with render_page("/", "es") as page:
            job = get_localized_job(get_global_context(page), "senior-developer")
    """
    context = create_render_context(locale, settings=settings, timezone=timezone)
    page = PageRender(path)
    page.attach(context)
    log_render_start(path, context.locale_code, context.date_format)

    failed = True
    try:
        yield page
        failed = False
    finally:
        page.detach()
        log_render_end(path, failed=failed)
