from __future__ import annotations

import logging
from typing import Any, Optional


# PUBLIC_INTERFACE
class Diagnostics:
    """
    Development-only debug sink.

    When disabled (production builds) every call is a no-op, so nothing reaches
    the logging system regardless of logger configuration.
    """

    def __init__(self, enabled: bool, logger: Optional[logging.Logger] = None) -> None:
        self.enabled = enabled
        self._logger = logger or logging.getLogger(__name__)

    def debug(self, msg: str, *args: Any) -> None:
        if self.enabled:
            self._logger.debug(msg, *args)
