"""Language recognition - how confidently a text matches a given language."""

import logging
from abc import ABC, abstractmethod

from langdetect import DetectorFactory, detect_langs
from langdetect.lang_detect_exception import LangDetectException

logger = logging.getLogger(__name__)


class LanguageRecognizer(ABC):
    """Scores how likely a text is written in a language."""

    @abstractmethod
    def match_confidence(self, text: str, language_code: str) -> float:
        """
        Args:
            text: Text to score.
            language_code: ISO 639-1 code, e.g. "en".

        Returns:
            Confidence in [0.0, 1.0]; 0.0 when the language is not detected.
        """
        pass


class LangdetectRecognizer(LanguageRecognizer):
    """Recognizer backed by langdetect's probabilistic detector."""

    def __init__(self, seed: int = 0):
        # langdetect is non-deterministic unless seeded
        DetectorFactory.seed = seed

    def match_confidence(self, text: str, language_code: str) -> float:
        if not text or not text.strip():
            return 0.0

        try:
            candidates = detect_langs(text)
        except LangDetectException as e:
            logger.debug("Language detection failed for %r: %s", text[:40], e)
            return 0.0

        wanted = _base_code(language_code)
        return max(
            (candidate.prob for candidate in candidates if _base_code(candidate.lang) == wanted),
            default=0.0,
        )


def _base_code(code: str) -> str:
    # langdetect reports regional variants such as "zh-cn"
    return code.lower().split("-")[0]
