"""
Integration tests for rendering a page against settings, catalogs and content on disk.

Uses tests/fixtures/site.yaml: locales en (primary), es, pt (falls back to es),
Spanish dates as dd/MM/yyyy.
"""

from datetime import timedelta, timezone
from pathlib import Path

import pytest

from vitae.contexts.content import (
    ContentNotFoundError,
    ContentStore,
    get_localized_education,
    get_localized_interest,
    get_localized_job,
    get_localized_skill,
)
from vitae.contexts.rendering import (
    format_date,
    format_date_for,
    get_global_context,
    get_translation,
    load_site_settings,
    render_page,
)

FIXTURES_PATH = Path(__file__).parent.parent / "fixtures"


@pytest.fixture
def settings(monkeypatch):
    for name in ("VITAE_SITE_URL", "VITAE_CONTENT_PATH", "VITAE_LOCALES_PATH"):
        monkeypatch.delenv(name, raising=False)
    return load_site_settings(FIXTURES_PATH / "site.yaml")


@pytest.fixture
def store(settings):
    return ContentStore(settings.content_path)


@pytest.mark.integration
def test_spanish_page_mixes_translated_and_fallback_records(settings, store):
    with render_page("/", "es", settings=settings) as page:
        context = get_global_context(page)

        job = get_localized_job(context, "senior-developer", store)
        skill = get_localized_skill(context, "typescript", store)

    assert job.slug == "senior-developer"
    assert job["role"] == "Senior Developer"
    assert job.body.startswith("Led the billing platform migration.")
    assert skill.slug == "typescript-es"
    assert skill["level"] == "Experto"


@pytest.mark.integration
def test_english_page_uses_primary_records(settings, store):
    with render_page("/", "en", settings=settings) as page:
        context = get_global_context(page)
        skill = get_localized_skill(context, "typescript", store)

    assert skill.slug == "typescript"
    assert skill["level"] == "Expert"


@pytest.mark.integration
def test_portuguese_page_falls_back_through_spanish(settings, store):
    with render_page("/", "pt", settings=settings) as page:
        context = get_global_context(page)

        assert get_localized_skill(context, "typescript", store).slug == "typescript-es"
        assert get_localized_interest(context, "photography", store)["name"] == "Fotografía"
        assert get_localized_job(context, "senior-developer", store).slug == "senior-developer"


@pytest.mark.integration
def test_missing_entry_aborts_render(settings, store):
    with pytest.raises(ContentNotFoundError, match='collection="jobs", id="cto", locale="es"'):
        with render_page("/", "es", settings=settings) as page:
            get_localized_job(get_global_context(page), "cto", store)

    assert not page.has_context


@pytest.mark.integration
@pytest.mark.parametrize("hours", [-10, -5, 0, 3, 12])
def test_content_dates_keep_calendar_day(settings, store, hours):
    tz = timezone(timedelta(hours=hours))

    with render_page("/", "es", settings=settings, timezone=tz) as page:
        job = get_localized_job(get_global_context(page), "senior-developer", store)
        started = format_date_for(job["startDate"], page)

    assert started == "01/06/2021"


@pytest.mark.integration
def test_english_dates_use_default_format(settings, store):
    with render_page("/", "en", settings=settings, timezone=timezone.utc) as page:
        context = get_global_context(page)
        degree = get_localized_education(context, "bachelor-degree", store)

        assert format_date(degree["endDate"], context) == "June 2018"


@pytest.mark.integration
def test_translations_follow_page_locale(settings):
    with render_page("/", "es", settings=settings) as page:
        t = get_translation(page)

        assert t("sections.experience") == "Experiencia"
        assert t("labels.present") == "Present"
        assert t("footer.updated", date="15/03/2024") == "Actualizado el 15/03/2024"
        assert t("years", count=3) == "3 años"
