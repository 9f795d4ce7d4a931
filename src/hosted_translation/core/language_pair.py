"""Language pair entity - source/target language codes for a translation."""

from dataclasses import dataclass
from typing import Optional

# ISO 639-1 code -> English language name.
LANGUAGE_NAMES = {
    "af": "Afrikaans", "am": "Amharic", "ar": "Arabic", "az": "Azerbaijani",
    "be": "Belarusian", "bg": "Bulgarian", "bn": "Bengali", "bs": "Bosnian",
    "ca": "Catalan", "cs": "Czech", "cy": "Welsh", "da": "Danish",
    "de": "German", "el": "Greek", "en": "English", "eo": "Esperanto",
    "es": "Spanish", "et": "Estonian", "eu": "Basque", "fa": "Persian",
    "fi": "Finnish", "fil": "Filipino", "fr": "French", "ga": "Irish",
    "gl": "Galician", "gu": "Gujarati", "ha": "Hausa", "he": "Hebrew",
    "hi": "Hindi", "hr": "Croatian", "ht": "Haitian Creole", "hu": "Hungarian",
    "hy": "Armenian", "id": "Indonesian", "ig": "Igbo", "is": "Icelandic",
    "it": "Italian", "ja": "Japanese", "jv": "Javanese", "ka": "Georgian",
    "kk": "Kazakh", "km": "Khmer", "kn": "Kannada", "ko": "Korean",
    "ku": "Kurdish", "ky": "Kyrgyz", "la": "Latin", "lb": "Luxembourgish",
    "lo": "Lao", "lt": "Lithuanian", "lv": "Latvian", "mg": "Malagasy",
    "mi": "Maori", "mk": "Macedonian", "ml": "Malayalam", "mn": "Mongolian",
    "mr": "Marathi", "ms": "Malay", "mt": "Maltese", "my": "Burmese",
    "ne": "Nepali", "nl": "Dutch", "no": "Norwegian", "ny": "Chichewa",
    "pa": "Punjabi", "pl": "Polish", "ps": "Pashto", "pt": "Portuguese",
    "ro": "Romanian", "ru": "Russian", "rw": "Kinyarwanda", "sd": "Sindhi",
    "si": "Sinhala", "sk": "Slovak", "sl": "Slovenian", "sm": "Samoan",
    "sn": "Shona", "so": "Somali", "sq": "Albanian", "sr": "Serbian",
    "st": "Sesotho", "su": "Sundanese", "sv": "Swedish", "sw": "Swahili",
    "ta": "Tamil", "te": "Telugu", "tg": "Tajik", "th": "Thai",
    "tk": "Turkmen", "tl": "Tagalog", "tr": "Turkish", "tt": "Tatar",
    "ug": "Uyghur", "uk": "Ukrainian", "ur": "Urdu", "uz": "Uzbek",
    "vi": "Vietnamese", "xh": "Xhosa", "yi": "Yiddish", "yo": "Yoruba",
    "zh": "Chinese", "zu": "Zulu",
}


def language_name(code: str) -> str:
    """English name for a language code, falling back to the upper-cased code."""
    return LANGUAGE_NAMES.get(code.strip().lower(), code.upper())


@dataclass(frozen=True)
class LanguagePair:
    """Source and target language codes, e.g. ``LanguagePair("en", "fr")``."""

    source: str
    target: str

    @property
    def string(self) -> str:
        """Hosting form, e.g. ``"en-fr"``."""
        return f"{self.source}-{self.target}"

    @property
    def is_idempotent(self) -> bool:
        """True when translating between the two languages is a no-op."""
        return self.source.strip().lower() == self.target.strip().lower()

    @property
    def is_well_formed(self) -> bool:
        return all(
            code and code.strip().lower() in LANGUAGE_NAMES
            for code in (self.source, self.target)
        )

    @classmethod
    def from_string(cls, string: str) -> Optional["LanguagePair"]:
        """Parse ``"en-fr"``; returns None if the string has no single separator."""
        components = string.split("-")
        if len(components) != 2 or not all(components):
            return None
        return cls(components[0], components[1])

    def __str__(self) -> str:
        return self.string
