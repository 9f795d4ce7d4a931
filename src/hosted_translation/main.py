"""Main entry point for the hosted translation command-line tool."""

import argparse
import asyncio
import logging
import sys
from pathlib import Path
from typing import List, Optional

from hosted_translation.core import LanguagePair, TranslationInput
from hosted_translation.io import InMemoryRemoteStore, JsonFileRemoteStore, RemoteStore
from hosted_translation.services import (
    CacheStore,
    Database,
    EnhancementConfiguration,
    GeminiEnhancementService,
    GeminiTranslationService,
    HostedTranslationArchiver,
    HostedTranslationService,
    InMemoryTranslationArchive,
    LangdetectRecognizer,
    LocalTranslationArchive,
    NetworkConfig,
    OperationExecutor,
    SettingsManager,
    TranslationService,
)

logger = logging.getLogger(__name__)


def build_translation_service(
    config: NetworkConfig,
    store: RemoteStore,
    translator: Optional[TranslationService] = None,
    local_archive: Optional[LocalTranslationArchive] = None,
) -> HostedTranslationService:
    """
    Composition root: the only place that knows how to wire all components.

    Args:
        config: Environment, timeout, API key and gate state.
        store: Remote document store holding the hosted archive.
        translator: Machine-translation backend; Gemini when omitted.
        local_archive: On-device archive; in-memory when omitted.
    """
    executor = OperationExecutor(config.status, config.activity_indicator, config.default_timeout)
    database = Database(store, executor, CacheStore(), config.environment)
    archiver = HostedTranslationArchiver(database, local_archive or InMemoryTranslationArchive())
    recognizer = LangdetectRecognizer()

    if translator is None:
        translator = GeminiTranslationService(api_key=config.gemini_api_key)

    enhancement_service = None
    if config.gemini_api_key:
        enhancement_service = GeminiEnhancementService(executor, recognizer, api_key=config.gemini_api_key)

    return HostedTranslationService(
        archiver,
        executor,
        translator,
        language_recognizer=recognizer,
        enhancement_service=enhancement_service,
        translate_timeout=config.default_timeout,
    )


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Translate text through the hosted translation archive.")
    parser.add_argument("text", nargs="+", help="Text to translate (each argument is one input)")
    parser.add_argument("--pair", required=True, help="Language pair, e.g. en-fr")
    parser.add_argument("--enhance", action="store_true", help="Post-edit fresh translations with Gemini")
    parser.add_argument("--context", default="", help="Additional context for enhancement")
    parser.add_argument(
        "--store",
        type=Path,
        help="JSON file holding the hosted archive; an empty in-memory store is used when omitted",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    return parser.parse_args(argv)


async def run(args: argparse.Namespace, service: HostedTranslationService) -> int:
    language_pair = LanguagePair.from_string(args.pair)
    if language_pair is None:
        logger.error("Invalid language pair %r; expected <source>-<target>.", args.pair)
        return 2

    enhancement = EnhancementConfiguration(additional_context=args.context) if args.enhance else None
    result = await service.get_translations(
        [TranslationInput(text) for text in args.text],
        language_pair,
        enhancement,
    )
    if result.is_error:
        logger.error("Translation failed: %s", result.error)
        return 1

    for translation in result.value:
        print(translation.output)
    return 0


def main(argv: Optional[List[str]] = None) -> int:
    args = parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    config = SettingsManager().build_network_config()
    if not config.gemini_api_key:
        logger.error("GEMINI_API_KEY is not set; add it to .env.")
        return 2

    service = build_translation_service(config, open_store(args.store))
    return asyncio.run(run(args, service))


def open_store(path: Optional[Path]) -> RemoteStore:
    """File-backed store when ``path`` is given, so the archive persists across runs."""
    if path is None:
        return InMemoryRemoteStore()
    return JsonFileRemoteStore(path)


if __name__ == "__main__":
    sys.exit(main())
