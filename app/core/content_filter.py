"""
Viewer-side content filter.

Classification is a pure function of (text, config, lexicon). It is applied
at read time with the viewer's own settings and never touches stored data.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from enum import Enum
from typing import Iterable, Optional, Pattern

from app.constants.profanity import PROFANITY_WORDS

MESSAGE_HIDDEN_PREVIEW = "Message hidden"
MESSAGE_HIDDEN_PLACEHOLDER = "Message hidden (Contains potential {reason})."

URL_PATTERN = re.compile(
    r"\b(?:https?|ftp|file)://[-A-Z0-9+&@#/%?=~_|!:,.;]*[-A-Z0-9+&@#/%=~_|]",
    re.IGNORECASE,
)

_NON_ALNUM = re.compile(r"[^a-z0-9]")


def normalize_token(token: str) -> str:
    """Lowercase and drop every non-alphanumeric (ASCII) character."""
    return _NON_ALNUM.sub("", token.lower())


class FilterReason(str, Enum):
    PROFANITY = "profanity"
    LINK = "link"
    NONE = "none"

    @property
    def label(self) -> str:
        return self.value.capitalize()


@dataclass(frozen=True)
class FilterConfig:
    """A viewer's chat filter settings."""

    block_links: bool = False
    block_profanity: bool = False

    @classmethod
    def from_settings(cls, raw: Optional[dict]) -> "FilterConfig":
        """Build from the stored chat_filters dict (missing keys mean off)."""
        raw = raw or {}
        return cls(
            block_links=bool(raw.get("block_links", False)),
            block_profanity=bool(raw.get("block_profanity", False)),
        )


@dataclass(frozen=True)
class FilterLexicon:
    """Immutable word list and URL pattern used by ContentFilter."""

    words: frozenset[str] = field(default_factory=frozenset)
    url_pattern: Pattern[str] = URL_PATTERN

    @classmethod
    def from_words(
        cls, words: Iterable[str], url_pattern: Pattern[str] = URL_PATTERN
    ) -> "FilterLexicon":
        normalized = frozenset(w for w in (normalize_token(x) for x in words) if w)
        return cls(words=normalized, url_pattern=url_pattern)

    @classmethod
    def default(cls, extra_words: Iterable[str] = ()) -> "FilterLexicon":
        return cls.from_words([*PROFANITY_WORDS, *extra_words])


@dataclass(frozen=True)
class Classification:
    blocked: bool
    reason: FilterReason = FilterReason.NONE


NOT_BLOCKED = Classification(blocked=False, reason=FilterReason.NONE)


@dataclass(frozen=True)
class RenderedText:
    """What a viewer gets for one message body."""

    text: str
    blocked: bool
    reason: FilterReason
    placeholder: Optional[str] = None


class ContentFilter:
    """Classifies message text against a viewer's FilterConfig."""

    def __init__(self, lexicon: Optional[FilterLexicon] = None) -> None:
        self._lexicon = lexicon or FilterLexicon.default()

    @property
    def lexicon(self) -> FilterLexicon:
        return self._lexicon

    def classify(self, text: str, config: FilterConfig) -> Classification:
        text = text or ""
        if config.block_profanity and self._contains_profanity(text):
            return Classification(blocked=True, reason=FilterReason.PROFANITY)
        if config.block_links and self._lexicon.url_pattern.search(text):
            return Classification(blocked=True, reason=FilterReason.LINK)
        return NOT_BLOCKED

    def render_message(
        self,
        text: str,
        sender_uid: Optional[str],
        viewer_uid: str,
        config: FilterConfig,
    ) -> RenderedText:
        """
        Full-conversation rendering. Own messages are never classified.

        The original text is always returned so the client can reveal a
        blocked message locally; the placeholder is what it shows by default.
        """
        if sender_uid == viewer_uid:
            return RenderedText(text=text, blocked=False, reason=FilterReason.NONE)
        result = self.classify(text, config)
        if not result.blocked:
            return RenderedText(text=text, blocked=False, reason=FilterReason.NONE)
        return RenderedText(
            text=text,
            blocked=True,
            reason=result.reason,
            placeholder=MESSAGE_HIDDEN_PLACEHOLDER.format(reason=result.reason.label),
        )

    def render_preview(
        self,
        text: Optional[str],
        sender_uid: Optional[str],
        viewer_uid: str,
        config: FilterConfig,
    ) -> str:
        """Conversation-list preview; a blocked preview has no reveal."""
        text = text or ""
        if sender_uid == viewer_uid:
            return text
        if self.classify(text, config).blocked:
            return MESSAGE_HIDDEN_PREVIEW
        return text

    def _contains_profanity(self, text: str) -> bool:
        words = self._lexicon.words
        for token in text.split():
            if normalize_token(token) in words:
                return True
        return False


def build_content_filter(extra_words: Iterable[str] = ()) -> ContentFilter:
    return ContentFilter(FilterLexicon.default(extra_words))
