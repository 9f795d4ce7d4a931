"""Test doubles and corpus builders shared across test modules."""

from typing import Dict, List, Optional, Tuple

from hosted_translation.core import (
    LanguagePair,
    Translation,
    TranslationInput,
    TranslationUnavailable,
    encode,
)
from hosted_translation.services import LanguageRecognizer, TranslationService


class FakeRecognizer(LanguageRecognizer):
    """Returns preset confidences keyed by (text, language); ``default`` otherwise."""

    def __init__(self, scores: Optional[Dict[Tuple[str, str], float]] = None, default: float = 0.0):
        self.scores = scores or {}
        self.default = default

    def match_confidence(self, text: str, language_code: str) -> float:
        return self.scores.get((text, language_code), self.default)


class FakeTranslator(TranslationService):
    """Looks translations up in a dict; unknown inputs are unavailable."""

    def __init__(self, outputs: Optional[Dict[str, str]] = None):
        self.outputs = outputs or {}
        self.requests: List[Tuple[str, str]] = []

    async def translate(self, input: TranslationInput, language_pair: LanguagePair) -> Translation:
        self.requests.append((input.value, language_pair.string))
        if input.value not in self.outputs:
            raise TranslationUnavailable(language_pair=language_pair.string)
        return Translation(input=input, output=self.outputs[input.value], language_pair=language_pair)


def hosted_record(input_value: str, output: str, language_pair: LanguagePair) -> Tuple[str, str]:
    """(hash, encoded value) as stored under ``translations/<pair>``."""
    reference = encode(Translation(TranslationInput(input_value), output, language_pair))
    return reference.type.key, reference.type.value


def hosted_corpus(*translations: Tuple[str, str, LanguagePair]) -> Dict[str, dict]:
    """Remote store tree for the production environment holding the given translations."""
    pairs: Dict[str, Dict[str, str]] = {}
    for input_value, output, language_pair in translations:
        key, value = hosted_record(input_value, output, language_pair)
        pairs.setdefault(language_pair.string, {})[key] = value
    return {"prod": {"translations": pairs}}
