"""Unit tests for per-run logging setup."""

import sys

import pytest
from loguru import logger

import vitae
from vitae.contexts.rendering.settings import settings_from_dict
from vitae.utils.logger import provenance, setup_logger


@pytest.fixture(autouse=True)
def restore_logger():
    yield
    logger.remove()
    logger.add(sys.stderr)


@pytest.fixture
def settings(tmp_path):
    return settings_from_dict(
        {"paths": {"content": "/srv/site/content", "locales": "/srv/site/locales"}},
        base_dir=tmp_path,
    )


@pytest.mark.unit
def test_provenance_without_settings():
    fields = provenance()

    assert fields["vitae"] == vitae.__version__
    assert "Python" in fields
    assert "Content path" not in fields


@pytest.mark.unit
def test_provenance_records_site_settings(settings):
    fields = provenance(settings)

    assert fields["Site settings"] == "built-in defaults"
    assert fields["Content path"] == str(settings.content_path)
    assert fields["Locales"] == "en (primary), en, es"


@pytest.mark.unit
def test_setup_logger_writes_header_and_debug_to_file(tmp_path, settings):
    log_file = setup_logger("content", tmp_path / "run", settings=settings)
    logger.debug("[content] Loaded 2 record(s)")
    logger.remove()

    assert log_file == tmp_path / "run" / "content.log"
    text = log_file.read_text(encoding="utf-8")
    assert f"Content path: {settings.content_path}" in text
    assert "[content] Loaded 2 record(s)" in text


@pytest.mark.unit
@pytest.mark.parametrize("verbose", [False, True])
def test_console_shows_debug_only_when_verbose(tmp_path, capsys, verbose):
    setup_logger("content", tmp_path, verbose=verbose)
    logger.debug("[content] No 'es' translation for jobs/x")
    logger.info("[content] Loaded skills")

    out = capsys.readouterr().out
    assert "Loaded skills" in out
    assert ("No 'es' translation" in out) is verbose
