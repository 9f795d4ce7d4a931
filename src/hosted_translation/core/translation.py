"""Translation entities - an input, its output, and the language pair between them."""

from dataclasses import dataclass
from typing import TYPE_CHECKING, Iterable, Optional

from .language_pair import LanguagePair
from .text_normalization import ENHANCEMENT_TOKEN

if TYPE_CHECKING:
    from .translation_reference import TranslationReference


@dataclass(frozen=True)
class TranslationInput:
    """Text submitted for translation, with an optional alternate phrasing."""

    value: str
    alternate: Optional[str] = None

    @property
    def is_well_formed(self) -> bool:
        return bool(self.value.strip())


def inputs_are_well_formed(inputs: Iterable[TranslationInput]) -> bool:
    inputs = list(inputs)
    return bool(inputs) and all(item.is_well_formed for item in inputs)


@dataclass(frozen=True)
class Translation:
    """A translated value."""

    input: TranslationInput
    output: str
    language_pair: LanguagePair

    @property
    def is_well_formed(self) -> bool:
        """
        Non-blank output and, unless the pair is idempotent, an output that
        differs from the input.
        """
        if not self.output.strip():
            return False
        if self.language_pair.is_idempotent:
            return True
        return self.output != self.input.value

    @property
    def is_ai_enhanced(self) -> bool:
        return self.output.startswith(ENHANCEMENT_TOKEN)

    @property
    def echoes_input(self) -> bool:
        return self.input.value == self.output

    @property
    def reference(self) -> "TranslationReference":
        from .translation_reference import encode

        return encode(self)
