import pytest

from resume_analyzer.core.config import get_settings
from resume_analyzer.core.text_normalization import build_context


@pytest.fixture(autouse=True)
def _fresh_settings(monkeypatch):
    """Settings are cached per process; tests that touch env vars need a clean cache."""
    monkeypatch.delenv("OPENAI_API_KEY", raising=False)
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def ctx():
    """Factory: ctx("text", file_path=None) -> AnalysisContext"""
    def _make(text, file_path=None, email=None):
        c = build_context(text, file_path=file_path)
        c.email = email
        return c
    return _make
