import logging
from typing import Any

# Library logger; applications opt in to output by attaching handlers
logger = logging.getLogger("githours")
logger.addHandler(logging.NullHandler())

DEFAULT_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def get_logger(name: str | None = None) -> logging.Logger:
    """Get the githours logger, or one of its children.

    Args:
        name: Child logger name, e.g. ``"walker"``. If None, the top level
              githours logger is returned.

    Returns:
        logging.Logger: The requested logger instance.
    """
    if name is None:
        return logger
    return logger.getChild(name)


def set_log_level(level: int | str) -> None:
    """Set the level of the githours logger.

    Args:
        level: A level name such as ``'INFO'`` or a numeric level such as ``logging.INFO``.
    """
    logger.setLevel(level)


def _has_handler(kind: type, **attrs: Any) -> bool:
    for handler in logger.handlers:
        if type(handler) is kind and all(getattr(handler, k, None) == v for k, v in attrs.items()):
            return True
    return False


def add_stream_handler(
    level: int | str = logging.INFO,
    format_string: str = DEFAULT_FORMAT,
    **handler_kwargs: Any,
) -> None:
    """Attach a StreamHandler to the githours logger.

    Only one stream handler is ever attached; a second call logs a warning and returns.

    Args:
        level: Level for the new handler. Defaults to INFO.
        format_string: Format string for emitted records.
        **handler_kwargs: Passed through to ``logging.StreamHandler``.
    """
    if _has_handler(logging.StreamHandler):
        logger.warning("StreamHandler already exists for githours logger.")
        return

    handler = logging.StreamHandler(**handler_kwargs)
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter(format_string))
    logger.addHandler(handler)


def add_file_handler(
    filename: str,
    level: int | str = logging.INFO,
    format_string: str = DEFAULT_FORMAT,
    **handler_kwargs: Any,
) -> None:
    """Attach a FileHandler writing to ``filename``.

    Args:
        filename: Path of the log file.
        level: Level for the new handler. Defaults to INFO.
        format_string: Format string for emitted records.
        **handler_kwargs: Passed through to ``logging.FileHandler``.
    """
    handler = logging.FileHandler(filename, **handler_kwargs)
    if _has_handler(logging.FileHandler, baseFilename=handler.baseFilename):
        handler.close()
        logger.warning(f"FileHandler for {filename} already exists for githours logger.")
        return

    handler.setLevel(level)
    handler.setFormatter(logging.Formatter(format_string))
    logger.addHandler(handler)


def remove_all_handlers() -> None:
    """Detach and close every handler except the default NullHandler."""
    for handler in logger.handlers[:]:
        if not isinstance(handler, logging.NullHandler):
            logger.removeHandler(handler)
            handler.close()


__all__ = [
    "logger",
    "get_logger",
    "set_log_level",
    "add_stream_handler",
    "add_file_handler",
    "remove_all_handlers",
]
