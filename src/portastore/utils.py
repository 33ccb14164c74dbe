import logging

PACKAGE_LOGGER_NAME = "portastore"

logger = logging.getLogger(__name__)


# Storage modules pass `extra={"storage_root": ...}` when they know which root an
# operation belongs to; every other record gets a placeholder.
class StorageLogFilter(logging.Filter):
    """Makes sure every record carries a 'storage_root' attribute."""

    def filter(self, record: logging.LogRecord) -> bool:
        storage_root = getattr(record, "storage_root", None)
        record.storage_root = "-" if storage_root is None else str(storage_root)
        return True


def init_storage_logging(level: int = logging.INFO) -> logging.Handler:
    """
    Send portastore's own log records to the console.

    The handler is attached to the 'portastore' logger only, so the
    application's root logger configuration is left alone. Calling this again
    replaces the handler installed by the previous call instead of adding a
    second one.

    Args:
        level: Level for the portastore logger (e.g. logging.INFO, logging.DEBUG)

    Returns:
        The installed handler
    """
    package_logger = logging.getLogger(PACKAGE_LOGGER_NAME)

    for handler in package_logger.handlers[:]:
        if any(isinstance(f, StorageLogFilter) for f in handler.filters):
            package_logger.removeHandler(handler)
            handler.close()

    stream_handler = logging.StreamHandler()
    stream_handler.setFormatter(
        logging.Formatter("%(asctime)s - %(levelname)s - [%(name)s] [%(storage_root)s] %(message)s")
    )
    stream_handler.addFilter(StorageLogFilter())

    package_logger.addHandler(stream_handler)
    package_logger.setLevel(level)

    logger.debug(f"portastore logging set to {logging.getLevelName(level)}")
    return stream_handler
