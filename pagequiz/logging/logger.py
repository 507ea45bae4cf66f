import logging
import sys


class Log:
    """Centralized logging for the quiz client and the generation server."""

    _logger: logging.Logger = logging.getLogger("pagequiz")
    _FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
    _SERVER_LOGGERS = ("uvicorn", "uvicorn.error", "uvicorn.access")

    @classmethod
    def configure(cls, log_level: str, *, server: bool = False) -> None:
        """Set the level and attach a stdout handler.

        With ``server=True`` the uvicorn loggers share the same handler so
        request logs and application logs come out in one format.
        """
        level = log_level.upper()
        handler = cls._build_handler()
        cls._logger.setLevel(level)
        if not cls._logger.handlers:
            cls._logger.addHandler(handler)
        if server:
            for name in cls._SERVER_LOGGERS:
                server_logger = logging.getLogger(name)
                server_logger.setLevel(level)
                server_logger.handlers = [handler]
                server_logger.propagate = False

    @classmethod
    def _build_handler(cls) -> logging.Handler:
        handler = logging.StreamHandler(sys.stdout)
        handler.setFormatter(logging.Formatter(cls._FORMAT))
        return handler

    @classmethod
    def info(cls, message: str, **kwargs: object) -> None:
        cls._logger.info(message, extra=kwargs)

    @classmethod
    def error(cls, message: str, **kwargs: object) -> None:
        cls._logger.error(message, extra=kwargs)

    @classmethod
    def exception(cls, message: str, **kwargs: object) -> None:
        """Log an error with the active exception's traceback."""
        cls._logger.exception(message, extra=kwargs)

    @classmethod
    def warning(cls, message: str, **kwargs: object) -> None:
        cls._logger.warning(message, extra=kwargs)

    @classmethod
    def debug(cls, message: str, **kwargs: object) -> None:
        cls._logger.debug(message, extra=kwargs)
