"""Unit tests for the render context store."""

import dataclasses
from pathlib import Path

import pytest
from babel import Locale

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
from vitae.contexts.rendering.settings import settings_from_dict

FIXTURES_PATH = Path(__file__).parent.parent / "fixtures"


def make_context(locale="es", fallback_locales=()):
    return RenderContext(
        locale=Locale.parse(locale),
        date_format="dd/MM/yyyy",
        i18n=Translator(locale, {"sections": {"skills": "Habilidades"}}),
        primary_locale="en",
        fallback_locales=fallback_locales,
    )


@pytest.fixture
def settings(monkeypatch):
    for name in ("VITAE_SITE_URL", "VITAE_CONTENT_PATH", "VITAE_LOCALES_PATH"):
        monkeypatch.delenv(name, raising=False)

    return settings_from_dict(
        {
            "locales": {"primary": "en", "supported": ["en", "es", "pt"], "fallbacks": {"pt": ["es"]}},
            "date_format": {"default": "MMMM yyyy", "overrides": {"es": "dd/MM/yyyy"}},
        },
        base_dir=FIXTURES_PATH,
    )


@pytest.mark.unit
def test_get_global_context_without_context_fails():
    page = PageRender("/cv")

    with pytest.raises(ConfigurationError) as exc_info:
        get_global_context(page)

    assert "not been initialized" in str(exc_info.value)
    assert exc_info.value.page_path == "/cv"


@pytest.mark.unit
def test_get_global_context_returns_attached_context():
    page = PageRender("/")
    context = make_context()
    page.attach(context)

    assert get_global_context(page) is context


@pytest.mark.unit
def test_get_global_context_slice():
    page = PageRender("/")
    context = make_context()
    page.attach(context)

    context_slice = get_global_context(page, "locale", "date_format")

    assert dict(context_slice) == {"locale": context.locale, "date_format": "dd/MM/yyyy"}
    with pytest.raises(TypeError):
        context_slice["date_format"] = "yyyy"


@pytest.mark.unit
def test_get_global_context_unknown_field():
    page = PageRender("/")
    page.attach(make_context())

    with pytest.raises(ConfigurationError, match="Unknown render context field"):
        get_global_context(page, "theme")


@pytest.mark.unit
def test_get_global_context_rejects_foreign_value():
    page = PageRender("/")
    page.locals["context"] = {"locale": "es"}

    with pytest.raises(ConfigurationError, match="must be a RenderContext"):
        get_global_context(page)


@pytest.mark.unit
def test_context_cannot_be_attached_twice():
    page = PageRender("/")
    page.attach(make_context())

    with pytest.raises(ConfigurationError, match="already attached"):
        page.attach(make_context())


@pytest.mark.unit
def test_render_context_is_immutable():
    context = make_context()

    with pytest.raises(dataclasses.FrozenInstanceError):
        context.date_format = "yyyy"


@pytest.mark.unit
def test_get_translation():
    page = PageRender("/")
    page.attach(make_context())

    t = get_translation(page)

    assert t("sections.skills") == "Habilidades"


@pytest.mark.unit
def test_locale_chain():
    assert make_context("en").locale_chain() == ()
    assert make_context("es").locale_chain() == ("es",)
    assert make_context("pt", fallback_locales=("es", "en", "es")).locale_chain() == ("pt", "es")


@pytest.mark.unit
def test_create_render_context(settings):
    context = create_render_context("es", settings=settings)

    assert context.locale_code == "es"
    assert context.date_format == "dd/MM/yyyy"
    assert context.primary_locale == "en"
    assert context.translate("sections.experience") == "Experiencia"


@pytest.mark.unit
def test_create_render_context_with_fallbacks(settings):
    context = create_render_context("pt", settings=settings)

    assert context.date_format == "MMMM yyyy"
    assert context.locale_chain() == ("pt", "es")
    # pt catalog -> es catalog -> en catalog
    assert context.translate("sections.experience") == "Experiência"
    assert context.translate("sections.skills") == "Habilidades"
    assert context.translate("labels.present") == "Present"


@pytest.mark.unit
def test_create_render_context_unsupported_locale(settings):
    with pytest.raises(ConfigurationError, match="not supported"):
        create_render_context("fr", settings=settings)


@pytest.mark.unit
def test_render_page_detaches_context(settings):
    with render_page("/", "es", settings=settings) as page:
        assert get_global_context(page).locale_code == "es"

    assert not page.has_context
    with pytest.raises(ConfigurationError):
        get_global_context(page)


@pytest.mark.unit
def test_render_page_detaches_context_on_error(settings):
    with pytest.raises(RuntimeError):
        with render_page("/", "es", settings=settings) as page:
            raise RuntimeError("page failed")

    assert not page.has_context
