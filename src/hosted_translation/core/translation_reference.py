"""
Translation reference codec.

A translation is hosted under a content-addressable key:

* non-idempotent pairs -> ``ArchivedReference(hash, value)`` where ``hash`` is the
  SHA-256 digest of the input and ``value`` is ``"<input>–<output>"``, each side
  percent-encoded so the delimiter never appears unescaped;
* idempotent pairs -> ``IdempotentReference(base64(input))``.
"""

import base64
import binascii
import hashlib
import re
from dataclasses import dataclass
from typing import Optional, Tuple, Union
from urllib.parse import quote, unquote_to_bytes

from .errors import DecodingFailed
from .language_pair import LanguagePair
from .text_normalization import sanitize
from .translation import Translation, TranslationInput

COMPONENT_DELIMITER = "–"
IDEMPOTENT_PREFIX = "idempotent:"
HOSTING_KEY_SEPARATOR = " | "

_MALFORMED_ESCAPE = re.compile(r"%(?![0-9A-Fa-f]{2})")


def content_hash(value: str) -> str:
    """Stable digest of an input string, used as its archive key."""
    return hashlib.sha256(value.encode("utf-8")).hexdigest()


def alpha_encode(value: str) -> str:
    """Percent-encode every character that is not alphanumeric."""
    return "".join(
        character if character.isalnum() else quote(character, safe="")
        for character in value
    )


def percent_decode(value: str) -> Optional[str]:
    """Strict percent decoding; None on a malformed escape or invalid UTF-8."""
    if _MALFORMED_ESCAPE.search(value):
        return None
    try:
        return unquote_to_bytes(value).decode("utf-8")
    except UnicodeDecodeError:
        return None


def base64_encode(value: str) -> str:
    return base64.b64encode(value.encode("utf-8")).decode("ascii")


def base64_decode(value: str) -> str:
    """Decode base64 text; returns the value unchanged if it is not base64."""
    try:
        return base64.b64decode(value, validate=True).decode("utf-8")
    except (binascii.Error, UnicodeDecodeError):
        return value


def encode_components(input_value: str, output: str) -> str:
    return f"{alpha_encode(input_value)}{COMPONENT_DELIMITER}{alpha_encode(output)}"


def decode_components(value: str) -> Optional[Tuple[str, str]]:
    """Split an archived value into its ``(input, output)`` pair."""
    components = value.split(COMPONENT_DELIMITER)
    if len(components) != 2:
        return None

    input_value = percent_decode(components[0])
    output = percent_decode(components[1])
    if input_value is None or output is None:
        return None
    return input_value, output


@dataclass(frozen=True)
class ArchivedReference:
    hash: str
    value: Optional[str] = None

    @property
    def key(self) -> str:
        return self.hash


@dataclass(frozen=True)
class IdempotentReference:
    encoded_value: str

    @property
    def key(self) -> str:
        return self.encoded_value

    @property
    def value(self) -> Optional[str]:
        return None


ReferenceType = Union[ArchivedReference, IdempotentReference]


@dataclass(frozen=True)
class TranslationReference:
    """Derived identity of a translation in the hosted archive."""

    language_pair: LanguagePair
    type: ReferenceType

    @property
    def hosting_key(self) -> str:
        if self.language_pair.is_idempotent:
            prefix = f"{IDEMPOTENT_PREFIX}{self.language_pair.source}"
        else:
            prefix = self.language_pair.string
        return f"{prefix}{HOSTING_KEY_SEPARATOR}{self.type.key}"

    @classmethod
    def from_hosting_key(cls, hosting_key: str) -> Optional["TranslationReference"]:
        """Parse a hosting key back into a (value-less) reference."""
        components = hosting_key.split(HOSTING_KEY_SEPARATOR)
        if len(components) != 2 or not components[1]:
            return None

        prefix, key = components
        if prefix.startswith(IDEMPOTENT_PREFIX):
            code = prefix[len(IDEMPOTENT_PREFIX):]
            if not code:
                return None
            return cls(LanguagePair(code, code), IdempotentReference(key))

        language_pair = LanguagePair.from_string(prefix)
        if language_pair is None:
            return None
        return cls(language_pair, ArchivedReference(key))


def encode(translation: Translation) -> TranslationReference:
    input_value = translation.input.value
    language_pair = translation.language_pair

    if language_pair.is_idempotent:
        return TranslationReference(language_pair, IdempotentReference(base64_encode(input_value)))

    return TranslationReference(
        language_pair,
        ArchivedReference(
            content_hash(input_value),
            value=encode_components(input_value, translation.output),
        ),
    )


def reference_for_hash(input_hash: str, language_pair: LanguagePair) -> TranslationReference:
    """Reference known only by its content hash (no decodable value)."""
    return TranslationReference(language_pair, ArchivedReference(input_hash))


def decode(reference: TranslationReference) -> Translation:
    """
    Rebuild a translation from its reference.

    Raises:
        DecodingFailed: the archived value is missing or malformed.
    """
    reference_type = reference.type

    if isinstance(reference_type, IdempotentReference):
        decoded = base64_decode(reference_type.encoded_value)
        return Translation(
            input=TranslationInput(decoded),
            output=sanitize(decoded),
            language_pair=reference.language_pair,
        )

    if reference_type.value is None:
        raise DecodingFailed(
            "Archived reference carries no value to decode.",
            hosting_key=reference.hosting_key,
        )

    components = decode_components(reference_type.value)
    if components is None:
        raise DecodingFailed(data=reference_type.value, hosting_key=reference.hosting_key)

    input_value, output = components
    return Translation(
        input=TranslationInput(input_value),
        output=output,
        language_pair=reference.language_pair,
    )
