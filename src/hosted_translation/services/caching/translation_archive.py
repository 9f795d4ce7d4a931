"""Local translation archive abstraction - plugin interface for on-device storage."""

from abc import ABC, abstractmethod
from typing import List, Optional

from hosted_translation.core import LanguagePair, Translation


class LocalTranslationArchive(ABC):
    """
    Abstract interface for the local, ephemeral translation archive.

    Entries are addressed by the content hash of the input plus the language
    pair. The hosted archiver reads and writes through this interface but never
    owns the storage behind it.
    """

    @abstractmethod
    def get(self, input_hash: str, language_pair: LanguagePair) -> Optional[Translation]:
        """
        Retrieve an archived translation.

        Args:
            input_hash: Content hash of the translation input.
            language_pair: Language pair of the translation.

        Returns:
            Translation if found, else None.
        """
        pass

    @abstractmethod
    def add(self, translation: Translation) -> None:
        """Store or overwrite a translation."""
        pass

    @abstractmethod
    def remove(self, input_hash: str, language_pair: LanguagePair) -> None:
        """Delete a single translation."""
        pass

    @abstractmethod
    def clear(self) -> None:
        pass

    @abstractmethod
    def list_keys(self) -> List[tuple[str, str]]:
        """
        List all (input hash, language pair string) keys.

        Useful for diagnostics and testing.
        """
        pass
