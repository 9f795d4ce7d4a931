"""Network environment and remote path helpers."""

from enum import Enum
from typing import Optional

TRANSLATIONS_PATH = "translations"


class NetworkEnvironment(Enum):
    DEVELOPMENT = "development"
    STAGING = "staging"
    PRODUCTION = "production"

    @property
    def short_string(self) -> str:
        return _SHORT_STRINGS[self]

    @classmethod
    def parse(cls, value: Optional[str]) -> Optional["NetworkEnvironment"]:
        """Accept either the long name or the short prefix (``dev``, ``stage``, ``prod``)."""
        if not value:
            return None
        value = value.strip().lower()
        for environment in cls:
            if value in (environment.value, environment.short_string):
                return environment
        return None


_SHORT_STRINGS = {
    NetworkEnvironment.DEVELOPMENT: "dev",
    NetworkEnvironment.STAGING: "stage",
    NetworkEnvironment.PRODUCTION: "prod",
}


def prepend_environment(path: str, environment: NetworkEnvironment) -> str:
    """``"/translations/en-fr/"`` -> ``"prod/translations/en-fr"``."""
    return f"{environment.short_string}/{path.strip('/')}"


def translations_path(*components: str) -> str:
    return "/".join((TRANSLATIONS_PATH,) + components)
