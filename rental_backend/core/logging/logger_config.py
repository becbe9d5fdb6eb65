"""
Central logging configuration for the rental backend.
"""

import logging

from .file_logger import FileLogger, configure_external_loggers
from .middleware import TransactionIdFilter
from .structured_logger import setup_structured_logging

APP_LOGGER_NAME = "rental_backend"


class LoggingConfig:
    """Holds the logging state so setup is done once per process."""

    def __init__(self):
        self.file_logger: FileLogger | None = None
        self._is_configured = False

    def setup(
        self,
        log_to_file: bool = True,
        log_level: str = "INFO",
        log_file_path: str = "logs/app.log",
        use_json_format: bool = True,
        max_bytes: int = 50 * 1024 * 1024,
        backup_count: int = 5,
    ) -> logging.Logger:
        """
        Configure application logging.

        With ``log_to_file`` every logger in the process is routed through a
        queue into stdout and a rotating file; otherwise only the
        ``rental_backend`` logger gets a stdout handler.
        """
        if self._is_configured:
            return get_logger()

        transaction_filter = TransactionIdFilter()

        if log_to_file:
            self.file_logger = FileLogger(
                log_file_path=log_file_path,
                max_bytes=max_bytes,
                backup_count=backup_count,
                log_level=log_level,
                use_json_format=use_json_format,
            )
            self.file_logger.start()
            queue_handler = self.file_logger.queue_handler
            queue_handler.addFilter(transaction_filter)
            configure_external_loggers(queue_handler, self.file_logger.level)
        else:
            logger = setup_structured_logging(log_level, use_json_format)
            for handler in logger.handlers:
                handler.addFilter(transaction_filter)

        self._is_configured = True
        return get_logger()

    def shutdown(self) -> None:
        if self.file_logger:
            self.file_logger.stop()
            self.file_logger = None
        self._is_configured = False


_logging_config = LoggingConfig()


def setup_logging(settings) -> logging.Logger:
    """Set up logging from the application settings."""
    return _logging_config.setup(
        log_to_file=settings.log_to_file,
        log_level=settings.log_level,
        log_file_path=settings.log_file_path,
        use_json_format=settings.log_format.lower() == "json",
        max_bytes=settings.log_max_bytes,
        backup_count=settings.log_backup_count,
    )


def get_logger(name: str | None = None) -> logging.Logger:
    """
    Get a logger namespaced under the application logger.

    Args:
        name: Optional suffix, e.g. ``"assets.reconciler"``
    """
    if name:
        return logging.getLogger(f"{APP_LOGGER_NAME}.{name}")
    return logging.getLogger(APP_LOGGER_NAME)


def shutdown_logging() -> None:
    """Shutdown logging gracefully."""
    _logging_config.shutdown()
