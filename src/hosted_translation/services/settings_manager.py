"""Settings Manager - Handles API key and network configuration."""

import logging
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv

from hosted_translation.core import NetworkEnvironment
from hosted_translation.services.networking import ActivityCounter, ActivityIndicator, NetworkStatus
from hosted_translation.services.networking.operation_executor import DEFAULT_TIMEOUT_SECONDS

logger = logging.getLogger(__name__)


@dataclass
class NetworkConfig:
    """Everything the networking layer needs at construction."""

    environment: NetworkEnvironment = NetworkEnvironment.PRODUCTION
    default_timeout: float = DEFAULT_TIMEOUT_SECONDS
    gemini_api_key: Optional[str] = None
    status: NetworkStatus = field(default_factory=NetworkStatus)
    activity_indicator: ActivityIndicator = field(default_factory=ActivityCounter)


class SettingsManager:
    """
    Manages settings and API key configuration.

    Reads values from a .env file in the project root, falling back to the
    process environment.
    """

    def __init__(self, project_root: Optional[Path] = None):
        """
        Initialize settings manager.

        Args:
            project_root: Path to project root where .env is located.
                         If None, searches upward from current file.
        """
        if project_root is None:
            current = Path(__file__).resolve()
            project_root = current.parent.parent.parent.parent

        env_path = project_root / ".env"
        load_dotenv(dotenv_path=env_path)

        self._project_root = project_root

    def get_gemini_api_key(self) -> Optional[str]:
        """Get the Gemini API key from environment."""
        key = os.getenv("GEMINI_API_KEY")
        return key.strip() if key and key.strip() else None

    def get_network_environment(self) -> NetworkEnvironment:
        value = os.getenv("NETWORK_ENVIRONMENT")
        environment = NetworkEnvironment.parse(value)
        if environment is None:
            if value:
                logger.warning("Unknown NETWORK_ENVIRONMENT %r; using production.", value)
            return NetworkEnvironment.PRODUCTION
        return environment

    def get_network_timeout(self) -> float:
        value = os.getenv("NETWORK_TIMEOUT_SECONDS")
        if not value or not value.strip():
            return DEFAULT_TIMEOUT_SECONDS
        try:
            timeout = float(value)
        except ValueError:
            logger.warning("Invalid NETWORK_TIMEOUT_SECONDS %r; using %.0f.", value, DEFAULT_TIMEOUT_SECONDS)
            return DEFAULT_TIMEOUT_SECONDS
        return timeout if timeout > 0 else DEFAULT_TIMEOUT_SECONDS

    def build_network_config(
        self,
        status: Optional[NetworkStatus] = None,
        activity_indicator: Optional[ActivityIndicator] = None,
    ) -> NetworkConfig:
        return NetworkConfig(
            environment=self.get_network_environment(),
            default_timeout=self.get_network_timeout(),
            gemini_api_key=self.get_gemini_api_key(),
            status=status or NetworkStatus(),
            activity_indicator=activity_indicator or ActivityCounter(),
        )

    def reload_env(self) -> None:
        """Reload environment variables from .env file."""
        env_path = self._project_root / ".env"
        load_dotenv(dotenv_path=env_path, override=True)
