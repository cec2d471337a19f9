"""Fixtures for message translation without loading real models."""

import pytest

from app.routers.utils.dependencies import get_translator
from app.services.translation_service import TranslationService


class FakeTranslationBackend:
    """Tags the text with the model name and records every call."""

    def __init__(self):
        self.calls = []

    def translate(self, model_name, text):
        self.calls.append((model_name, text))
        return f"[{model_name.rsplit('-', 1)[-1]}] {text}"


@pytest.fixture
def translation_backend():
    return FakeTranslationBackend()


@pytest.fixture
def translator(translation_backend):
    return TranslationService(backend=translation_backend)


@pytest.fixture
def setup_translator(test_app, translator):
    """Route the translate endpoint to the fake-backed translator."""
    test_app.dependency_overrides[get_translator] = lambda: translator
    return translator
