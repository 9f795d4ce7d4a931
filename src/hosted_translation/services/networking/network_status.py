"""Connectivity and read/write enablement flags consulted before every remote call."""

import logging
from typing import Callable, Optional

logger = logging.getLogger(__name__)


class NetworkStatus:
    """
    Gate state for the operation executor.

    ``is_online`` may be backed by a probe callable supplied by the host
    application; read/write access starts enabled and is switched off for good
    once a forced update is required.
    """

    def __init__(self, online_probe: Optional[Callable[[], bool]] = None):
        self._online_probe = online_probe
        self._online = True
        self._read_write_enabled = True

    @property
    def is_online(self) -> bool:
        if self._online_probe is not None:
            return bool(self._online_probe())
        return self._online

    def set_online(self, online: bool) -> None:
        self._online = online

    @property
    def is_read_write_enabled(self) -> bool:
        return self._read_write_enabled

    def disable_read_write(self) -> None:
        if self._read_write_enabled:
            logger.warning("Read/write access disabled; remote operations will be refused.")
        self._read_write_enabled = False
