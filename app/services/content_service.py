"""Promotional content check for health communications.

KVKK and the Turkish health advertising rules forbid promotional wording in
patient-facing content.
"""

import re

from app.core.exceptions import BadRequestException

FORBIDDEN_WORDS = (
    "discount",
    "offer",
    "campaign",
    "sale",
    "promotion",
    "deal",
    "special",
    "limited",
    "free",
    "bonus",
    "indirim",
    "kampanya",
    "fırsat",
    "özel",
    "bedava",
)

CONTENT_VIOLATION_MESSAGE = "Content violates KVKK promotion restrictions."

# Clinical vocabulary that shares a stem with a forbidden word
EXEMPT_STEMS = (
    "specialis",
    "specializ",
    "specialt",
    "özellik",
)

_WORD_RE = re.compile(r"\w+", re.UNICODE)


class PromotionalContentException(BadRequestException):
    """Content contains promotional wording."""

    def __init__(self, forbidden_words: list[str]):
        super().__init__(CONTENT_VIOLATION_MESSAGE, extra={"forbiddenWords": forbidden_words})
        self.forbidden_words = forbidden_words


def find_forbidden_words(*texts: str | None) -> list[str]:
    """
    Return the promotional words found in any of ``texts``, in list order.

    A word matches when it starts with a forbidden word, so inflected forms
    ("discounts", "kampanyası") are caught.
    """
    words: set[str] = set()
    for text in texts:
        if text:
            words.update(w.casefold() for w in _WORD_RE.findall(text))
    words = {w for w in words if not w.startswith(EXEMPT_STEMS)}
    return [f for f in FORBIDDEN_WORDS if any(w.startswith(f) for w in words)]


def ensure_no_promotional_content(*texts: str | None) -> None:
    """Raise PromotionalContentException if any text is promotional."""
    found = find_forbidden_words(*texts)
    if found:
        raise PromotionalContentException(found)
