import logging
import sys


class ContextFormatter(logging.Formatter):
    """Appends keyword context given to ``Log`` as sorted ``key=value`` pairs."""

    def formatMessage(self, record: logging.LogRecord) -> str:  # noqa: N802
        line = super().formatMessage(record)
        context = getattr(record, "context", None)
        if not context:
            return line
        pairs = " ".join(f"{key}={value}" for key, value in sorted(context.items()))
        return f"{line} | {pairs}"


class Log:
    """Centralized logging with structured format.

    Keyword arguments travel on the record under ``context`` rather than as
    top-level ``extra`` keys, so names like ``filename`` cannot clash with
    LogRecord attributes.
    """

    _logger: logging.Logger = logging.getLogger("docintake")

    @classmethod
    def configure(cls, log_level: str) -> None:
        """Configure the logger with the specified level and stdout handler."""
        cls._logger.setLevel(log_level.upper())
        if not cls._logger.handlers:
            handler = logging.StreamHandler(sys.stdout)
            handler.setFormatter(
                ContextFormatter("%(asctime)s [%(levelname)s] %(message)s")
            )
            cls._logger.addHandler(handler)

    @classmethod
    def info(cls, message: str, **kwargs: object) -> None:
        cls._logger.info(message, extra={"context": kwargs})

    @classmethod
    def error(cls, message: str, **kwargs: object) -> None:
        cls._logger.error(message, extra={"context": kwargs})

    @classmethod
    def exception(cls, message: str, **kwargs: object) -> None:
        """Log at error level with the active exception's traceback."""
        cls._logger.exception(message, extra={"context": kwargs})

    @classmethod
    def warning(cls, message: str, **kwargs: object) -> None:
        cls._logger.warning(message, extra={"context": kwargs})

    @classmethod
    def debug(cls, message: str, **kwargs: object) -> None:
        cls._logger.debug(message, extra={"context": kwargs})
