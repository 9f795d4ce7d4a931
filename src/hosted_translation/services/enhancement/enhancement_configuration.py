"""Configuration for AI post-editing of translations."""

from dataclasses import dataclass
from enum import Enum


class GeminiModel(Enum):
    FLASH_20 = "gemini-2.0-flash"
    FLASH_25 = "gemini-2.5-flash"


@dataclass(frozen=True)
class EnhancementConfiguration:
    """
    Per-request enhancement settings.

    Attributes:
        model: Gemini model to post-edit with.
        maximum_output_tokens: Cap on generated tokens.
        temperature: Sampling temperature; 0.0 keeps edits minimal.
        additional_context: Optional hint appended to the prompt (e.g. "UI button label").
    """

    model: GeminiModel = GeminiModel.FLASH_25
    maximum_output_tokens: int = 256
    temperature: float = 0.0
    additional_context: str = ""
