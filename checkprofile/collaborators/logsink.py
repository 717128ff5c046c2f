# LogSink backed by the standard logging module.

from __future__ import annotations

import logging
from typing import Optional

from checkprofile.collaborators.base import LogSink

logger = logging.getLogger(__name__)


class LoggingLogSink(LogSink):
    """
    Forwards profile warnings and errors to a logging.Logger.

    User-facing errors are logged too and kept in user_errors so a host
    (the CLI, an IDE) can display them after the call returns.
    """

    def __init__(self, target: Optional[logging.Logger] = None) -> None:
        self.logger = target if target is not None else logger
        self.user_errors: list[tuple[str, Optional[BaseException]]] = []

    def log_warning(self, message: str) -> None:
        self.logger.warning("%s", message)

    def log_error(self, message: str, cause: BaseException | None = None) -> None:
        self.logger.error("%s: %s", message, cause, exc_info=cause)

    def show_user_error(self, message: str, cause: BaseException | None = None) -> None:
        self.user_errors.append((message, cause))
        self.logger.error("%s: %s", message, cause, exc_info=cause)
