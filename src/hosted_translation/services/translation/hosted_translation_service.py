"""
Hosted Translation Service - the entry point callers translate through.

Resolution order for a single input:

1. idempotent pair -> the sanitized input, no network;
2. local archive hit -> the archived translation;
3. untranslatable input (no letters, or already in the target language) ->
   the sanitized input;
4. archived translation (hosted or derived); malformed records are
   purged from both archives and the lookup is retried once;
5. remote translation, optionally AI-enhanced, then archived.
"""

import logging
from typing import List, Optional

from hosted_translation.core import (
    ArchivedReference,
    DecodingFailed,
    DerivationFailed,
    EnhancementError,
    InvalidTranslationError,
    LanguagePair,
    NetworkingError,
    NoValueExists,
    Result,
    Translation,
    TranslationInput,
    TranslationReference,
    TranslationUnavailable,
    content_hash,
    decode,
    language_name,
    sanitize,
    translations_path,
)
from hosted_translation.core.text_normalization import contains_letters, trim_trailing_whitespace
from hosted_translation.core.translation import inputs_are_well_formed
from hosted_translation.services.caching import LocalTranslationArchive
from hosted_translation.services.enhancement import (
    EnhancementConfiguration,
    GeminiEnhancementService,
    LanguageRecognizer,
)
from hosted_translation.services.networking import OperationExecutor
from hosted_translation.services.translation.hosted_translation_archiver import HostedTranslationArchiver
from hosted_translation.services.translation.translation_service import TranslationService

logger = logging.getLogger(__name__)

TRANSLATE_TIMEOUT_SECONDS = 10.0
SAME_LANGUAGE_CONFIDENCE_THRESHOLD = 0.8


class HostedTranslationService:
    """Translates text, reusing the hosted archive wherever possible."""

    def __init__(
        self,
        archiver: HostedTranslationArchiver,
        executor: OperationExecutor,
        translator: TranslationService,
        language_recognizer: Optional[LanguageRecognizer] = None,
        enhancement_service: Optional[GeminiEnhancementService] = None,
        translate_timeout: float = TRANSLATE_TIMEOUT_SECONDS,
    ):
        self.archiver = archiver
        self.executor = executor
        self.translator = translator
        self.language_recognizer = language_recognizer
        self.enhancement_service = enhancement_service
        self.translate_timeout = translate_timeout

    @property
    def local_archive(self) -> LocalTranslationArchive:
        return self.archiver.local_archive

    async def translate(
        self,
        input: TranslationInput,
        language_pair: LanguagePair,
        enhancement: Optional[EnhancementConfiguration] = None,
    ) -> Result[Translation]:
        """
        Translate a single input.

        Args:
            input: Text to translate.
            language_pair: Source and target languages.
            enhancement: When given, post-edit fresh translations with Gemini.

        Returns:
            Result with the translation or the first error encountered.
        """
        validation_error = _validate([input], language_pair)
        if validation_error is not None:
            return Result.failure(validation_error)

        if language_pair.is_idempotent:
            return Result.success(self._echo(input, language_pair))

        local = self.local_archive.get(content_hash(input.value), language_pair)
        if local is not None and local.is_well_formed and not local.echoes_input:
            return Result.success(local)

        if self._is_untranslatable(input, language_pair):
            logger.debug("Input needs no translation to %s; returning it as is.", language_pair.target)
            return Result.success(self._echo(input, language_pair))

        archived = await self._find_archived(input, language_pair, retry=True)
        if archived.is_error:
            return Result.failure(archived.error)
        if archived.value is not None:
            return Result.success(archived.value)

        return await self._translate_remotely(input, language_pair, enhancement)

    async def get_translations(
        self,
        inputs: List[TranslationInput],
        language_pair: LanguagePair,
        enhancement: Optional[EnhancementConfiguration] = None,
    ) -> Result[List[Translation]]:
        """Translate inputs in order; the first failure aborts the batch."""
        validation_error = _validate(inputs, language_pair)
        if validation_error is not None:
            return Result.failure(validation_error)

        translations = []
        for input in inputs:
            result = await self.translate(input, language_pair, enhancement)
            if result.is_error:
                return Result.failure(result.error)
            translations.append(result.value)
        return Result.success(translations)

    async def find_archived_translation(self, input_hash: str, language_pair: LanguagePair) -> Result[Translation]:
        return await self.archiver.find_archived_translation_by_id(input_hash, language_pair)

    async def resolve_reference(self, reference: TranslationReference) -> Result[Translation]:
        """
        Turn a reference back into a translation.

        References carrying their archived value decode locally; hash-only
        references are looked up in the local, then hosted, archive.
        """
        reference_type = reference.type
        language_pair = reference.language_pair

        if isinstance(reference_type, ArchivedReference) and reference_type.value is None:
            local = self.local_archive.get(reference_type.hash, language_pair)
            if local is not None:
                return Result.success(local)

            result = await self.archiver.find_archived_translation_by_id(reference_type.hash, language_pair)
            if result.is_error:
                return Result.failure(result.error)
            translation = result.value
        else:
            try:
                translation = decode(reference)
            except DecodingFailed as error:
                return Result.failure(error)

        if not translation.echoes_input:
            self.local_archive.add(translation)
        return Result.success(translation)

    async def prime(self) -> Optional[NetworkingError]:
        return await self.archiver.prime()

    def clear_caches(self) -> None:
        """Drop cached remote values, the local archive and the derivation snapshot."""
        self.archiver.database.cache.clear()
        self.local_archive.clear()
        self.archiver.reset_snapshot()
        logger.info("Cleared translation caches.")

    async def _find_archived(
        self,
        input: TranslationInput,
        language_pair: LanguagePair,
        retry: bool,
    ) -> Result[Optional[Translation]]:
        """Archived translation, None when a fresh one is needed, or an error."""
        lookup = await self.archiver.find_archived_translation(input, language_pair)
        if lookup.is_failure_of(NoValueExists, DerivationFailed):
            return Result.success(None)
        if lookup.is_error:
            return Result.failure(lookup.error)

        translation = lookup.value.translation
        if translation.is_well_formed and not translation.echoes_input:
            return Result.success(translation)

        logger.warning("Discarding malformed archived translation %s.", translation.reference.hosting_key)
        self.local_archive.remove(content_hash(input.value), language_pair)
        removal = await self.archiver.remove_archived_translation(input, language_pair)
        if removal.is_error:
            return Result.failure(removal.error)

        if retry:
            return await self._find_archived(input, language_pair, retry=False)
        return Result.success(None)

    async def _translate_remotely(
        self,
        input: TranslationInput,
        language_pair: LanguagePair,
        enhancement: Optional[EnhancementConfiguration],
    ) -> Result[Translation]:
        logger.info(
            "Translating text from %s to %s.",
            language_name(language_pair.source),
            language_name(language_pair.target),
        )
        request = TranslationInput(
            trim_trailing_whitespace(input.value),
            alternate=trim_trailing_whitespace(input.alternate) if input.alternate else None,
        )
        result = await self.executor.execute(
            lambda: self.translator.translate(request, language_pair),
            timeout=self.translate_timeout,
            path=translations_path(language_pair.string),
        )
        if result.is_failure_of(TranslationUnavailable):
            logger.info("No translation available; returning input: %s", result.error)
            return Result.success(self._echo(input, language_pair))
        if result.is_error:
            return Result.failure(result.error)

        translation = Translation(input=input, output=result.value.output, language_pair=language_pair)

        if enhancement is not None:
            if self.enhancement_service is None:
                return Result.failure(EnhancementError("No enhancement service is configured."))
            outcome = await self.enhancement_service.enhance(translation, enhancement)
            if outcome.is_error:
                return Result.failure(outcome.error)
            if outcome.is_accepted:
                translation = outcome.translation
            else:
                logger.info("Keeping original translation: %s", outcome.rejection.reason)

        if not translation.is_well_formed:
            return Result.failure(InvalidTranslationError(hosting_key=translation.reference.hosting_key))

        write = await self.archiver.add_to_hosted_archive(translation)
        if write.is_error:
            return Result.failure(write.error)

        if not translation.echoes_input:
            self.local_archive.add(translation)
        return Result.success(translation)

    def _is_untranslatable(self, input: TranslationInput, language_pair: LanguagePair) -> bool:
        if not contains_letters(input.value):
            return True
        if self.language_recognizer is None:
            return False
        confidence = self.language_recognizer.match_confidence(input.value, language_pair.target)
        return confidence > SAME_LANGUAGE_CONFIDENCE_THRESHOLD

    @staticmethod
    def _echo(input: TranslationInput, language_pair: LanguagePair) -> Translation:
        return Translation(input=input, output=sanitize(input.value), language_pair=language_pair)


def _validate(inputs: List[TranslationInput], language_pair: LanguagePair) -> Optional[NetworkingError]:
    if not inputs_are_well_formed(inputs):
        return InvalidTranslationError("Translation inputs fail validation.")
    if not all(_is_encodable(input.value) and _is_encodable(input.alternate) for input in inputs):
        return InvalidTranslationError("Translation inputs are not valid UTF-8 text.")
    if not language_pair.is_well_formed:
        return InvalidTranslationError("Language pair fails validation.", language_pair=language_pair.string)
    return None


def _is_encodable(value: Optional[str]) -> bool:
    if value is None:
        return True
    try:
        value.encode("utf-8")
    except UnicodeEncodeError:
        return False
    return True
