"""Network activity observer invoked around each remote operation."""

import logging
from abc import ABC, abstractmethod

logger = logging.getLogger(__name__)


class ActivityIndicator(ABC):
    """Receives one ``show`` and exactly one matching ``hide`` per accepted operation."""

    @abstractmethod
    def show(self) -> None:
        pass

    @abstractmethod
    def hide(self) -> None:
        pass


class ActivityCounter(ActivityIndicator):
    """
    Default indicator: counts in-flight operations.

    ``is_active`` is what a UI would bind its spinner to.
    """

    def __init__(self):
        self.in_flight = 0
        self.total_started = 0

    @property
    def is_active(self) -> bool:
        return self.in_flight > 0

    def show(self) -> None:
        self.in_flight += 1
        self.total_started += 1
        logger.debug("Network activity started (%d in flight).", self.in_flight)

    def hide(self) -> None:
        self.in_flight = max(self.in_flight - 1, 0)
        logger.debug("Network activity stopped (%d in flight).", self.in_flight)
