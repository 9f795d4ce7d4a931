"""Text normalization utilities for translation keying and comparison."""

import re

ENHANCEMENT_TOKEN = "※"


def sanitize(text: str) -> str:
    """
    Sanitize text before it is used as a translation output.

    Rules:
    - Trim leading and trailing whitespace
    - Collapse runs of whitespace (spaces, tabs, newlines) to single spaces
    - Remove the AI enhancement token so a sanitized echo is never mistaken
      for an enhanced translation

    Args:
        text: Original text to sanitize.

    Returns:
        Sanitized text string.
    """
    text = text.replace(ENHANCEMENT_TOKEN, "")
    text = text.strip()
    text = re.sub(r'\s+', ' ', text)
    return text


def normalize_for_comparison(text: str) -> str:
    """Lowercase and trim; used to detect no-op rewrites."""
    return text.strip().lower()


def trim_trailing_whitespace(text: str) -> str:
    return text.rstrip()


def contains_letters(text: str) -> bool:
    """True if the text contains at least one Unicode letter."""
    return any(character.isalpha() for character in text)
