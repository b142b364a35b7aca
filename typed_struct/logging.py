import logging as py_logging
import os
import sys
import typing

LoggerLike = typing.Union[py_logging.Logger, py_logging.LoggerAdapter]


def setup_logging(
    log_file: typing.Optional[str] = None,
    console: typing.Optional[typing.TextIO] = sys.stdout,
    base_level: typing.Union[int, str] = py_logging.INFO,
    format: typing.Optional[str] = None,
    datefmt: typing.Optional[str] = "%d/%b/%Y %H:%M:%S",
    handlers: typing.Optional[typing.Sequence[py_logging.Handler]] = None,
) -> None:
    """
    Simple interface to set up logging to a file and/or console stream.

    :param log_file: Path to the log file. File will be created if it does not exist.
    :param console: Console stream to log to. Set to None to disable console logging.
    :param base_level: Base log level.
    :param format: Log message format.
    :param datefmt: Date format for log messages.
    :param handlers: Additional logging handlers to add.
    """
    handlers = list(handlers or [])
    if console:
        handlers.append(py_logging.StreamHandler(console))

    if log_file:
        directory = os.path.dirname(log_file)
        if directory and not os.path.exists(directory):
            os.makedirs(directory, exist_ok=True, mode=0o755)
        handlers.append(py_logging.FileHandler(log_file))

    py_logging.basicConfig(
        level=base_level,
        format=format or "[%(asctime)s] %(name)s %(levelname)s %(message)s",
        datefmt=datefmt,
        handlers=handlers,
        force=True,
    )


def _to_level(level: typing.Union[int, str]) -> int:
    if isinstance(level, int):
        return level
    return getattr(py_logging, level.upper(), py_logging.INFO)


def log_message(
    message: str,
    level: typing.Union[int, str] = py_logging.INFO,
    logger: typing.Optional[LoggerLike] = None,
) -> None:
    """
    Log a message with the specified log level.

    :param message: Message to log.
    :param level: Log level to use.
    :param logger: Optional logger to use. Defaults to the `typed_struct` logger.
    """
    logger = logger or py_logging.getLogger("typed_struct")
    logger.log(_to_level(level), message)


def log_exception(
    exc: BaseException,
    message: typing.Optional[str] = None,
    *,
    level: typing.Union[int, str] = py_logging.ERROR,
    name: typing.Optional[str] = None,
    logger: typing.Optional[LoggerLike] = None,
) -> None:
    """
    Log an exception with an optional custom message and its traceback.

    :param exc: Exception object.
    :param message: Optional custom message to log.
    :param level: Log level to use.
    :param name: Optional name for the logger.
    :param logger: Optional logger to use.
    """
    logger = logger or py_logging.getLogger(name or "typed_struct")
    if message:
        log_message = f"{message}: {exc}"
    else:
        log_message = f"An error occurred: {exc}"
    logger.log(
        _to_level(level),
        log_message,
        exc_info=(type(exc), exc, exc.__traceback__),
    )
