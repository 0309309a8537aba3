"""
Site Settings

Loads the site-wide configuration every page render is built from: which
locales exist, which one is primary, how dates are formatted per locale, and
where content and translation catalogs live.

Settings come from a YAML file (VITAE_SITE_CONFIG, default config/site.yaml)
merged over built-in defaults with OmegaConf. A few environment variables
override individual values:

    VITAE_SITE_URL       site.url
    VITAE_CONTENT_PATH   paths.content
    VITAE_LOCALES_PATH   paths.locales

Examples:
    >>> settings = load_site_settings(Path("config/site.yaml"))
    >>> settings.locales.primary
    'en'
    >>> settings.date_format_for("es")
    "MMMM 'de' yyyy"
"""

import os
from dataclasses import dataclass, field
from functools import lru_cache
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple

import yaml
from dotenv import load_dotenv
from omegaconf import OmegaConf
from omegaconf.errors import OmegaConfBaseException

from vitae.contexts.rendering.exceptions import ConfigurationError
from vitae.contexts.rendering.logger import log_settings_loaded

load_dotenv()
PROJECT_ROOT = Path(os.getenv("PROJECT_ROOT", Path(__file__).resolve().parents[3]))
SITE_CONFIG_PATH = Path(os.getenv("VITAE_SITE_CONFIG", PROJECT_ROOT / "config" / "site.yaml"))

DEFAULT_SETTINGS = {
    "site": {
        "url": "http://localhost:4321",
    },
    "paths": {
        "content": "content",
        "locales": "locales",
    },
    "locales": {
        "primary": "en",
        "supported": ["en", "es"],
        "fallbacks": {},
    },
    "date_format": {
        "default": "MMMM yyyy",
        "overrides": {},
    },
}


@dataclass(frozen=True)
class LocaleSettings:
    """
    Locales the site renders in.

    Attributes:
        primary: Locale whose content records carry no locale (the canonical records)
        supported: Every locale a page can be rendered in (primary included)
        fallbacks: Per-locale list of other secondary locales to try before the
                   primary record (e.g. {"pt": ("es",)})
    """

    primary: str = "en"
    supported: Tuple[str, ...] = ("en", "es")
    fallbacks: Dict[str, Tuple[str, ...]] = field(default_factory=dict)

    def is_supported(self, locale: str) -> bool:
        return locale in self.supported

    def fallback_chain(self, locale: str) -> Tuple[str, ...]:
        """
        Secondary locales to try, in order, for a render in `locale`.

        The primary locale never appears in the chain; it is what every chain
        ends on implicitly.
        """
        if locale == self.primary:
            return ()

        chain = [locale]
        for candidate in self.fallbacks.get(locale, ()):
            if candidate != self.primary and candidate not in chain:
                chain.append(candidate)
        return tuple(chain)


@dataclass(frozen=True)
class SiteSettings:
    """
    Resolved site configuration.

    Attributes:
        site_url: Public URL of the site
        content_path: Directory holding one subdirectory per content collection
        locales_path: Directory holding {locale}.yaml translation catalogs
        locales: Locale settings
        default_date_format: Date pattern used when a locale has no override
        date_format_overrides: Per-locale date patterns
        config_path: File the settings were loaded from (None for built-in defaults)
    """

    site_url: str
    content_path: Path
    locales_path: Path
    locales: LocaleSettings = field(default_factory=LocaleSettings)
    default_date_format: str = "MMMM yyyy"
    date_format_overrides: Dict[str, str] = field(default_factory=dict)
    config_path: Optional[Path] = None

    def date_format_for(self, locale: str) -> str:
        return self.date_format_overrides.get(locale, self.default_date_format)


def _as_tuple(value: Any, setting: str) -> Tuple[str, ...]:
    if isinstance(value, str):
        return (value,)
    if not isinstance(value, list):
        raise ConfigurationError(f"Setting '{setting}' must be a list of locale codes, got {value!r}")
    return tuple(str(item) for item in value)


def _resolve_path(value: str, base_dir: Path) -> Path:
    path = Path(value).expanduser()
    return path if path.is_absolute() else (base_dir / path).resolve()


def _validate_locales(locales: LocaleSettings) -> None:
    if not locales.supported:
        raise ConfigurationError("Setting 'locales.supported' must list at least one locale")

    if locales.primary not in locales.supported:
        raise ConfigurationError(
            f"Primary locale '{locales.primary}' is not in supported locales {list(locales.supported)}"
        )

    for locale, targets in locales.fallbacks.items():
        for target in (locale, *targets):
            if target not in locales.supported:
                raise ConfigurationError(
                    f"Fallback locale '{target}' (from locales.fallbacks.{locale}) is not in "
                    f"supported locales {list(locales.supported)}"
                )


def _path_setting(env_var: str, configured: str, base_dir: Path) -> Path:
    """A path from the environment if set, else from the settings file."""
    override = os.getenv(env_var)
    if override:
        return _resolve_path(override, PROJECT_ROOT)
    return _resolve_path(configured, base_dir)


def settings_from_dict(raw: Dict[str, Any], base_dir: Path, config_path: Path = None) -> SiteSettings:
    """
    Build SiteSettings from a settings dict shaped like DEFAULT_SETTINGS.

    Missing keys take their default. Relative paths from the settings are
    resolved against `base_dir`; relative paths from the environment against
    PROJECT_ROOT, like the rest of `.env`.

    Raises:
        ConfigurationError: If the locale settings are inconsistent
    """
    merged = OmegaConf.to_container(
        OmegaConf.merge(OmegaConf.create(DEFAULT_SETTINGS), OmegaConf.create(raw)),
        resolve=True,
    )

    locale_cfg = merged["locales"]
    locales = LocaleSettings(
        primary=str(locale_cfg["primary"]),
        supported=_as_tuple(locale_cfg["supported"], "locales.supported"),
        fallbacks={
            str(locale): _as_tuple(targets, f"locales.fallbacks.{locale}")
            for locale, targets in (locale_cfg["fallbacks"] or {}).items()
        },
    )
    _validate_locales(locales)

    content_path = _path_setting("VITAE_CONTENT_PATH", merged["paths"]["content"], base_dir)
    locales_path = _path_setting("VITAE_LOCALES_PATH", merged["paths"]["locales"], base_dir)

    return SiteSettings(
        site_url=os.getenv("VITAE_SITE_URL") or merged["site"]["url"],
        content_path=content_path,
        locales_path=locales_path,
        locales=locales,
        default_date_format=merged["date_format"]["default"],
        date_format_overrides={
            str(locale): str(pattern)
            for locale, pattern in (merged["date_format"]["overrides"] or {}).items()
        },
        config_path=config_path,
    )


def load_site_settings(config_path: Path = None) -> SiteSettings:
    """
    Load site settings from YAML, merged over DEFAULT_SETTINGS.

    Args:
        config_path: Settings file. Defaults to VITAE_SITE_CONFIG; when that
                     default file does not exist the built-in defaults are used.

    Returns:
        SiteSettings with absolute paths

    Raises:
        ConfigurationError: If an explicitly given file is missing, the YAML is
                            malformed, or the locale settings are inconsistent
    """
    explicit = config_path is not None
    if config_path is None:
        config_path = SITE_CONFIG_PATH

    if not config_path.exists():
        if explicit:
            raise ConfigurationError(f"Site settings file not found: {config_path}")
        settings = settings_from_dict({}, base_dir=PROJECT_ROOT)
        log_settings_loaded(None, settings.locales.primary, list(settings.locales.supported))
        return settings

    try:
        raw = OmegaConf.to_container(OmegaConf.load(config_path), resolve=True)
    except (yaml.YAMLError, OmegaConfBaseException) as e:
        raise ConfigurationError(f"Invalid site settings in {config_path}: {e}") from e

    if raw is None:
        raw = {}
    if not isinstance(raw, dict):
        raise ConfigurationError(f"Site settings in {config_path} must be a mapping")

    settings = settings_from_dict(raw, base_dir=config_path.parent.resolve(), config_path=config_path)
    log_settings_loaded(config_path, settings.locales.primary, list(settings.locales.supported))
    return settings


@lru_cache(maxsize=None)
def get_site_settings() -> SiteSettings:
    """Process-wide settings loaded from VITAE_SITE_CONFIG (cached)."""
    return load_site_settings()


def supported_secondary_locales(settings: SiteSettings) -> List[str]:
    """Supported locales other than the primary one, in configured order."""
    return [locale for locale in settings.locales.supported if locale != settings.locales.primary]
