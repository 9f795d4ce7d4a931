"""In-memory local translation archive for testing and session-level caching."""

from typing import List, Optional

from hosted_translation.core import LanguagePair, Translation, content_hash
from hosted_translation.services.caching.translation_archive import LocalTranslationArchive


class InMemoryTranslationArchive(LocalTranslationArchive):
    """
    Simple in-memory archive implementation.

    Used for testing and session-level caching. No persistence.
    """

    def __init__(self):
        # Structure: {language_pair_string: {input_hash: Translation}}
        self._store: dict[str, dict[str, Translation]] = {}

    def get(self, input_hash: str, language_pair: LanguagePair) -> Optional[Translation]:
        return self._store.get(language_pair.string, {}).get(input_hash)

    def add(self, translation: Translation) -> None:
        pair_archive = self._store.setdefault(translation.language_pair.string, {})
        pair_archive[content_hash(translation.input.value)] = translation

    def remove(self, input_hash: str, language_pair: LanguagePair) -> None:
        if language_pair.string in self._store:
            self._store[language_pair.string].pop(input_hash, None)

    def clear(self) -> None:
        self._store = {}

    def list_keys(self) -> List[tuple[str, str]]:
        return [
            (input_hash, pair_string)
            for pair_string, pair_archive in self._store.items()
            for input_hash in pair_archive
        ]
