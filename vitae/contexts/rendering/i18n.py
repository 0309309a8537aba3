"""
Translation catalogs and the translation function.

Catalogs are YAML files named after their locale ({locales_path}/es.yaml) with
nested keys addressed by dotted paths:

    sections:
      experience: Experiencia
    footer:
      updated: "Actualizado el {{date}}"
    years_one: "{{count}} año"
    years_other: "{{count}} años"

Values use i18next-style {{name}} interpolation. Passing `count` selects a
plural variant (`key_one`, `key_other`, ...) using the CLDR plural rules of
the catalog's locale.
"""

from pathlib import Path
from typing import Any, Dict, Optional, Sequence

import yaml
from babel import Locale
from jinja2 import Environment, Template
from omegaconf import DictConfig, OmegaConf
from omegaconf.errors import OmegaConfBaseException

from vitae.contexts.rendering.exceptions import ConfigurationError
from vitae.contexts.rendering.logger import log_missing_catalog, log_missing_translation


class Translator:
    """
    Translation function for one locale, with an optional fallback translator.

    Lookup order for `t(key)`: this catalog, then the fallback translator's
    catalogs, then the key itself.
    """

    def __init__(
        self,
        locale: str,
        catalog: Dict[str, Any] = None,
        fallback: Optional["Translator"] = None,
    ):
        self.locale = locale
        self.fallback = fallback
        self._catalog: DictConfig = OmegaConf.create(catalog or {})
        self._plural_locale = Locale.parse(locale)
        self._env = Environment(autoescape=False)
        self._templates: Dict[str, Template] = {}

    @classmethod
    def from_catalog_dir(
        cls, catalog_dir: Path, locale: str, fallback_locales: Sequence[str] = ()
    ) -> "Translator":
        """
        Load the translator for `locale` and its fallbacks from a catalog directory.

        Args:
            catalog_dir: Directory with {locale}.yaml catalogs
            locale: Locale to translate into
            fallback_locales: Locales consulted, in order, for keys `locale` lacks

        Returns:
            Translator whose fallback chain follows `fallback_locales`

        Raises:
            ConfigurationError: If a catalog exists but is not a valid YAML mapping
        """
        fallback = None
        for fallback_locale in reversed([code for code in fallback_locales if code != locale]):
            fallback = cls(fallback_locale, _load_catalog(catalog_dir, fallback_locale), fallback)

        return cls(locale, _load_catalog(catalog_dir, locale), fallback)

    def _lookup(self, key: str) -> Optional[str]:
        value = OmegaConf.select(self._catalog, key, default=None)
        if value is None or isinstance(value, DictConfig) or OmegaConf.is_list(value):
            return None
        return str(value)

    def _find(self, key: str, count: Any = None) -> Optional[str]:
        translator = self
        while translator is not None:
            if count is not None:
                plural = translator._plural_locale.plural_form(count)
                value = translator._lookup(f"{key}_{plural}")
                if value is not None:
                    return value
            value = translator._lookup(key)
            if value is not None:
                return value
            translator = translator.fallback
        return None

    def t(self, key: str, **params: Any) -> str:
        """
        Translate `key`, interpolating `params` into the value.

        Returns the key unchanged when no catalog defines it.

        Example:
            >>> translator.t("footer.updated", date="15/03/2024")
            'Actualizado el 15/03/2024'
        """
        text = self._find(key, params.get("count"))
        if text is None:
            log_missing_translation(key, self.locale)
            return key

        if "{{" not in text:
            return text

        template = self._templates.get(text)
        if template is None:
            template = self._env.from_string(text)
            self._templates[text] = template
        return template.render(**params)

    __call__ = t

    def __repr__(self) -> str:
        chain = [self.locale]
        fallback = self.fallback
        while fallback is not None:
            chain.append(fallback.locale)
            fallback = fallback.fallback
        return f"Translator({' -> '.join(chain)})"


def _load_catalog(catalog_dir: Path, locale: str) -> Dict[str, Any]:
    catalog_path = catalog_dir / f"{locale}.yaml"
    if not catalog_path.exists():
        log_missing_catalog(catalog_path)
        return {}

    try:
        catalog = OmegaConf.to_container(OmegaConf.load(catalog_path), resolve=True)
    except (yaml.YAMLError, OmegaConfBaseException) as e:
        raise ConfigurationError(f"Invalid translation catalog {catalog_path}: {e}") from e

    if catalog is None:
        return {}
    if not isinstance(catalog, dict):
        raise ConfigurationError(f"Translation catalog {catalog_path} must be a mapping")
    return catalog
