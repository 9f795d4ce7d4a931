"""
Hosted translation archiver - lookup, derivation and maintenance of archived translations.

Lookups go local archive -> hosted archive -> derivation. Derivation walks a
snapshot of the whole hosted corpus looking for a two-hop chain
``source -> intermediate -> target`` and writes any hit back to the hosted archive.
"""

import asyncio
import logging
from dataclasses import dataclass
from enum import Enum
from typing import Optional

from hosted_translation.core import (
    EMPTY_SNAPSHOT,
    ArchivedReference,
    DecodingFailed,
    DerivationFailed,
    InvalidTranslationError,
    LanguagePair,
    NetworkingError,
    NoValueExists,
    Result,
    Translation,
    TranslationInput,
    TranslationReference,
    TranslationSnapshot,
    TypeMismatch,
    content_hash,
    decode,
    translations_path,
)
from hosted_translation.core.network_environment import TRANSLATIONS_PATH
from hosted_translation.services.caching import LocalTranslationArchive
from hosted_translation.services.networking import Database

logger = logging.getLogger(__name__)

SNAPSHOT_EXPIRY_SECONDS = 120
PRIMED_SNAPSHOT_EXPIRY_SECONDS = 300
SEEDED_RECORD_TTL_MS = 600_000
RECENT_TRANSLATIONS_LIMIT = 100


class LookupStatus(Enum):
    FOUND = "found"
    DERIVED = "derived"


@dataclass(frozen=True)
class ArchivedTranslation:
    translation: Translation
    status: LookupStatus


class HostedTranslationArchiver:
    """
    Reads and writes the hosted translation archive.

    Owns the corpus snapshot used for derivation. At most one snapshot rebuild
    runs at a time; callers arriving during a rebuild return immediately and
    use whatever snapshot is current.
    """

    def __init__(self, database: Database, local_archive: LocalTranslationArchive):
        self.database = database
        self.local_archive = local_archive
        self._snapshot: TranslationSnapshot = EMPTY_SNAPSHOT
        self._snapshot_lock = asyncio.Lock()

    @property
    def snapshot(self) -> TranslationSnapshot:
        return self._snapshot

    @property
    def is_populating(self) -> bool:
        return self._snapshot_lock.locked()

    def reset_snapshot(self) -> None:
        self._snapshot = EMPTY_SNAPSHOT

    async def find_archived_translation(
        self,
        input: TranslationInput,
        language_pair: LanguagePair,
    ) -> Result[ArchivedTranslation]:
        """
        Find an archived translation for ``input``.

        Returns:
            Result with the translation and whether it was found or derived.
            Fails with NoValueExists/DerivationFailed when nothing is archived,
            or with the network error that interrupted the lookup.
        """
        if not language_pair.is_well_formed:
            return Result.failure(
                InvalidTranslationError("Language pair fails validation.", language_pair=language_pair.string)
            )

        input_hash = content_hash(input.value)

        local = self.local_archive.get(input_hash, language_pair)
        if local is not None:
            if local.is_well_formed and not local.echoes_input:
                return Result.success(ArchivedTranslation(local, LookupStatus.FOUND))
            logger.warning("Evicting malformed local translation for %s.", language_pair)
            self.local_archive.remove(input_hash, language_pair)

        hosted = await self.find_archived_translation_by_id(input_hash, language_pair)
        if not hosted.is_error:
            translation = hosted.value
            if not translation.echoes_input:
                self.local_archive.add(translation)
            return Result.success(ArchivedTranslation(translation, LookupStatus.FOUND))

        if not hosted.is_failure_of(NoValueExists):
            return Result.failure(hosted.error)

        return await self.derive_translation(input, language_pair)

    async def find_archived_translation_by_id(
        self,
        input_hash: str,
        language_pair: LanguagePair,
    ) -> Result[Translation]:
        """Fetch and decode the hosted record ``translations/<pair>/<hash>``."""
        path = translations_path(language_pair.string, input_hash)
        if not language_pair.is_well_formed:
            return Result.failure(InvalidTranslationError("Language pair fails validation.", path=path))

        result = await self.database.get_values(path)
        if result.is_error:
            return Result.failure(result.error.with_params(path=path))

        value = result.value
        if not isinstance(value, str):
            return Result.failure(TypeMismatch("Failed to typecast value to string.", path=path))

        try:
            translation = decode(TranslationReference(language_pair, ArchivedReference(input_hash, value)))
        except DecodingFailed as error:
            return Result.failure(error.with_params(path=path))
        return Result.success(translation)

    async def populate_snapshot(self, expiry_seconds: float = SNAPSHOT_EXPIRY_SECONDS) -> Optional[NetworkingError]:
        """
        Rebuild the corpus snapshot if it is empty or stale.

        Every record is also seeded into the cache store so that subsequent
        per-record reads are served locally.

        Returns:
            None on success or when no rebuild was needed, else the error.
        """
        if self._snapshot_lock.locked():
            logger.debug("Snapshot rebuild already in progress; skipping.")
            return None
        if not (self._snapshot.is_empty or self._snapshot.is_expired):
            return None

        async with self._snapshot_lock:
            result = await self.database.get_values(TRANSLATIONS_PATH)
            if result.is_error:
                return result.error

            data = result.value
            if not isinstance(data, dict) or not all(isinstance(records, dict) for records in data.values()):
                return TypeMismatch("Failed to typecast values to dictionary.", path=TRANSLATIONS_PATH)

            record_count = 0
            for pair_string, records in data.items():
                for input_hash, value in records.items():
                    key = self.database.resolve_path(translations_path(pair_string, input_hash))
                    self.database.cache.put(key, value, SEEDED_RECORD_TTL_MS)
                    record_count += 1

            self._snapshot = TranslationSnapshot(data=data, ttl_seconds=expiry_seconds)
            logger.info(
                "Populated translation snapshot with %d records across %d language pairs.",
                record_count,
                len(data),
            )
            return None

    async def prime(self) -> Optional[NetworkingError]:
        """Warm the snapshot ahead of demand with a longer expiry."""
        error = await self.populate_snapshot(PRIMED_SNAPSHOT_EXPIRY_SECONDS)
        if error is not None:
            logger.warning("Failed to prime translation snapshot: %s", error)
        return error

    async def derive_translation(
        self,
        input: TranslationInput,
        language_pair: LanguagePair,
    ) -> Result[ArchivedTranslation]:
        """
        Synthesize a translation from two archived hops.

        For each hosted pair ``source'-intermediate`` holding ``hash(input)``,
        look for the intermediate output under ``intermediate-target``. The
        first well-formed match wins and is written to the hosted archive.
        """
        error = await self.populate_snapshot()
        if error is not None:
            return Result.failure(error)

        snapshot = self._snapshot
        input_hash = content_hash(input.value)

        for pair_string in snapshot.data:
            first_pair = LanguagePair.from_string(pair_string)
            if first_pair is None or first_pair == language_pair or first_pair.is_idempotent:
                continue

            first_hop = _decode_record(snapshot, first_pair, input_hash)
            if first_hop is None:
                continue

            second_pair = LanguagePair(first_pair.target, language_pair.target)
            second_hop = _decode_record(snapshot, second_pair, content_hash(first_hop.output))
            if second_hop is None:
                continue

            derived = Translation(
                input=TranslationInput(input.value),
                output=second_hop.output,
                language_pair=language_pair,
            )
            if not derived.is_well_formed:
                continue

            if not language_pair.is_idempotent:
                write = await self.add_to_hosted_archive(derived)
                if write.is_error:
                    return Result.failure(write.error)

            logger.info("Derived %s translation via %s and %s.", language_pair, first_pair, second_pair)
            return Result.success(ArchivedTranslation(derived, LookupStatus.DERIVED))

        return Result.failure(DerivationFailed(language_pair=language_pair.string))

    async def add_to_hosted_archive(self, translation: Translation) -> Result[None]:
        """Write a well-formed, non-idempotent translation to the hosted archive."""
        reference = translation.reference
        if not translation.is_well_formed:
            return Result.failure(InvalidTranslationError(hosting_key=reference.hosting_key))

        reference_type = reference.type
        if translation.language_pair.is_idempotent or not isinstance(reference_type, ArchivedReference):
            return Result.failure(
                InvalidTranslationError(
                    "Idempotent translations are not hosted.",
                    hosting_key=reference.hosting_key,
                )
            )

        result = await self.database.update_child_values(
            translations_path(translation.language_pair.string),
            {reference_type.key: reference_type.value},
        )
        if result.is_error:
            return Result.failure(result.error.with_params(hosting_key=reference.hosting_key))

        logger.info("Added translation to hosted archive (%s).", reference.hosting_key)
        return Result.success(None)

    async def remove_archived_translation(
        self,
        input: TranslationInput,
        language_pair: LanguagePair,
    ) -> Result[None]:
        """Delete a hosted record; the database evicts its cache entry on success."""
        path = self.database.resolve_path(translations_path(language_pair.string))
        input_hash = content_hash(input.value)

        result = await self.database.update_child_values(path, {input_hash: None}, prepend_environment=False)
        if result.is_error:
            return Result.failure(result.error.with_params(language_pair=language_pair.string))

        logger.info("Removed archived translation %s/%s.", language_pair, input_hash)
        return Result.success(None)

    async def add_recently_uploaded_translations_to_local_archive(
        self,
        language_pair: LanguagePair,
    ) -> Result[int]:
        """
        Copy the most recent hosted records for ``language_pair`` into the local archive.

        Returns:
            Result with the number of translations added.
        """
        if language_pair.is_idempotent:
            return Result.success(0)
        if not language_pair.is_well_formed:
            return Result.failure(
                InvalidTranslationError("Language pair fails validation.", language_pair=language_pair.string)
            )

        path = translations_path(language_pair.string)
        result = await self.database.query_values(path, limit=RECENT_TRANSLATIONS_LIMIT, from_end=True)
        if result.is_error:
            return Result.failure(result.error.with_params(language_pair=language_pair.string))

        records = result.value
        if not isinstance(records, dict):
            return Result.failure(TypeMismatch("Failed to typecast values to dictionary.", path=path))

        translations = []
        for input_hash, value in records.items():
            if not isinstance(value, str):
                return Result.failure(TypeMismatch("Failed to typecast value to string.", path=f"{path}/{input_hash}"))
            try:
                translations.append(decode(TranslationReference(language_pair, ArchivedReference(input_hash, value))))
            except DecodingFailed as error:
                return Result.failure(error.with_params(language_pair=language_pair.string))

        for translation in translations:
            if not translation.echoes_input:
                self.local_archive.add(translation)

        logger.debug("Added %d recent %s translations to local archive.", len(translations), language_pair)
        return Result.success(len(translations))


def _decode_record(
    snapshot: TranslationSnapshot,
    language_pair: LanguagePair,
    input_hash: str,
) -> Optional[Translation]:
    value = snapshot.record(language_pair.string, input_hash)
    if value is None:
        return None
    try:
        return decode(TranslationReference(language_pair, ArchivedReference(input_hash, value)))
    except DecodingFailed:
        logger.debug("Skipping undecodable snapshot record %s/%s.", language_pair, input_hash)
        return None

