"""Translation Service - abstract machine-translation backend."""

from abc import ABC, abstractmethod

from hosted_translation.core import LanguagePair, Translation, TranslationInput


class TranslationService(ABC):
    """
    Abstract service for translating text between two languages.

    Implementations (e.g., GeminiTranslationService) handle API calls. They
    raise on failure; the operation executor wraps the exception into a typed
    error and applies the timeout.
    """

    @abstractmethod
    async def translate(self, input: TranslationInput, language_pair: LanguagePair) -> Translation:
        """
        Translate text.

        Args:
            input: Text to translate.
            language_pair: Source and target languages.

        Returns:
            Translation of the input.

        Raises:
            TranslationUnavailable: The backend cannot produce a distinct output.
        """
        pass
