"""
On-demand message translation.

Each supported (source, target) pair maps to one Helsinki-NLP opus-mt model.
Pipelines are loaded the first time their pair is requested and kept for the
life of the process. Results are cached per (pair, text) for a bounded time.
"""

from __future__ import annotations

import threading
from typing import Any, Callable, Dict, Optional, Protocol

from cachetools import TTLCache

from app.config import get_settings
from app.exceptions import TranslationFailedError, UnsupportedLanguagePairError
from app.infra.logging_config import get_logger

logger = get_logger("translation")

MODEL_MAP: Dict[str, str] = {
    "en-fr": "Helsinki-NLP/opus-mt-en-fr",
    "fr-en": "Helsinki-NLP/opus-mt-fr-en",
    "en-es": "Helsinki-NLP/opus-mt-en-es",
    "es-en": "Helsinki-NLP/opus-mt-es-en",
    "en-de": "Helsinki-NLP/opus-mt-en-de",
    "de-en": "Helsinki-NLP/opus-mt-de-en",
    "en-it": "Helsinki-NLP/opus-mt-en-it",
    "it-en": "Helsinki-NLP/opus-mt-it-en",
    "en-pt": "Helsinki-NLP/opus-mt-en-pt",
    "pt-en": "Helsinki-NLP/opus-mt-pt-en",
    "en-nl": "Helsinki-NLP/opus-mt-en-nl",
    "nl-en": "Helsinki-NLP/opus-mt-nl-en",
    "en-ru": "Helsinki-NLP/opus-mt-en-ru",
    "ru-en": "Helsinki-NLP/opus-mt-ru-en",
    # Japanese models are published under the "jap" code
    "en-ja": "Helsinki-NLP/opus-mt-en-jap",
    "ja-en": "Helsinki-NLP/opus-mt-jap-en",
}


class TranslationBackend(Protocol):
    def translate(self, model_name: str, text: str) -> str: ...


def _transformers_pipeline(model_name: str) -> Callable[[str], Any]:
    from transformers import pipeline

    return pipeline("translation", model=model_name)


class TransformersBackend:
    """Runs opus-mt models through a transformers translation pipeline."""

    def __init__(
        self, pipeline_factory: Optional[Callable[[str], Callable[[str], Any]]] = None
    ) -> None:
        self._factory = pipeline_factory or _transformers_pipeline
        self._pipelines: Dict[str, Callable[[str], Any]] = {}
        self._lock = threading.Lock()

    def _pipeline_for(self, model_name: str) -> Callable[[str], Any]:
        with self._lock:
            pipe = self._pipelines.get(model_name)
            if pipe is None:
                # A failed load is not stored, so the next call retries
                pipe = self._factory(model_name)
                self._pipelines[model_name] = pipe
                logger.info("Loaded translation model %s", model_name)
            return pipe

    def translate(self, model_name: str, text: str) -> str:
        result = self._pipeline_for(model_name)(text)
        if isinstance(result, list) and result:
            result = result[0]
        translated = result.get("translation_text") if isinstance(result, dict) else None
        if not isinstance(translated, str) or not translated:
            raise ValueError(f"Unexpected translation pipeline result: {result!r}")
        return translated


class TranslationService:
    """Resolves the model for a language pair and caches what it translates."""

    def __init__(
        self,
        backend: Optional[TranslationBackend] = None,
        cache_size: Optional[int] = None,
        cache_ttl_seconds: Optional[int] = None,
    ) -> None:
        settings = get_settings()
        self.backend: TranslationBackend = backend or TransformersBackend()
        self.default_source = settings.translation_default_source
        self._cache: TTLCache = TTLCache(
            maxsize=cache_size or settings.translation_cache_size,
            ttl=cache_ttl_seconds or settings.translation_cache_ttl_seconds,
        )
        self._cache_lock = threading.Lock()

    @staticmethod
    def model_for(source_language: str, target_language: str) -> str:
        model_name = MODEL_MAP.get(f"{source_language}-{target_language}")
        if model_name is None:
            raise UnsupportedLanguagePairError(
                f"Translation from {source_language} to {target_language} is not supported."
            )
        return model_name

    def translate(
        self,
        text: str,
        target_language: str,
        source_language: Optional[str] = None,
    ) -> str:
        """
        Translate text into target_language.

        Raises:
            UnsupportedLanguagePairError: no model covers the pair.
            TranslationFailedError: the model could not be loaded or run.
        """
        source = (source_language or self.default_source).strip().lower()
        target = target_language.strip().lower()
        model_name = self.model_for(source, target)

        key = (source, target, text)
        with self._cache_lock:
            cached = self._cache.get(key)
        if cached is not None:
            return cached

        try:
            translated = self.backend.translate(model_name, text)
        except Exception as e:
            logger.exception("Translation with %s failed", model_name)
            raise TranslationFailedError() from e

        with self._cache_lock:
            self._cache[key] = translated
        return translated
