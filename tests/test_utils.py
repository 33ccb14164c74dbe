"""
Tests for the portastore.utils logging helpers.
"""

import logging

import pytest

from portastore.utils import PACKAGE_LOGGER_NAME, StorageLogFilter, init_storage_logging


@pytest.fixture
def package_logger():
    """Yield the portastore logger and restore its handlers and level afterwards."""
    package_logger = logging.getLogger(PACKAGE_LOGGER_NAME)
    handlers = package_logger.handlers[:]
    level = package_logger.level
    yield package_logger
    for handler in package_logger.handlers[:]:
        package_logger.removeHandler(handler)
        if handler not in handlers:
            handler.close()
    for handler in handlers:
        package_logger.addHandler(handler)
    package_logger.setLevel(level)


def make_record(name: str = "portastore.folder", **extra) -> logging.LogRecord:
    record = logging.LogRecord(name, logging.INFO, __file__, 1, "message", None, None)
    for key, value in extra.items():
        setattr(record, key, value)
    return record


class TestStorageLogFilter:
    """Tests for StorageLogFilter."""

    def test_default_storage_root(self):
        """Test that records without a root get a placeholder."""
        record = make_record()

        assert StorageLogFilter().filter(record)
        assert record.storage_root == "-"

    def test_keeps_storage_root(self):
        """Test that an explicit root is kept as a string."""
        record = make_record(storage_root="notes")

        StorageLogFilter().filter(record)

        assert record.storage_root == "notes"

    def test_logger_name_untouched(self):
        """Test that record names pass through unchanged."""
        record = make_record(name="root")

        StorageLogFilter().filter(record)

        assert record.name == "root"


class TestInitStorageLogging:
    """Tests for init_storage_logging()."""

    def test_installs_single_handler(self, package_logger):
        """Test that repeated setup replaces its handler instead of adding another."""
        init_storage_logging(logging.DEBUG)
        handler = init_storage_logging(logging.DEBUG)

        installed = [
            h for h in package_logger.handlers
            if any(isinstance(f, StorageLogFilter) for f in h.filters)
        ]
        assert installed == [handler]
        assert package_logger.level == logging.DEBUG

    def test_root_logger_left_alone(self, package_logger):
        """Test that the application's root logger keeps its handlers and level."""
        root_logger = logging.getLogger()
        sentinel = logging.NullHandler()
        root_logger.addHandler(sentinel)
        handlers_before = root_logger.handlers[:]
        level_before = root_logger.level

        try:
            init_storage_logging(logging.DEBUG)

            assert root_logger.handlers == handlers_before
            assert root_logger.level == level_before
        finally:
            root_logger.removeHandler(sentinel)

    def test_keeps_foreign_handlers(self, package_logger):
        """Test that handlers added by the application to the portastore logger survive."""
        foreign = logging.NullHandler()
        package_logger.addHandler(foreign)

        init_storage_logging()

        assert foreign in package_logger.handlers

    def test_records_are_formatted_with_root(self, package_logger, mocker):
        """Test that portastore records reach the handler with a storage_root."""
        handler = init_storage_logging(logging.INFO)
        emit = mocker.patch.object(handler, "emit")

        logging.getLogger("portastore.roots").info("ready", extra={"storage_root": "notes"})

        record = emit.call_args.args[0]
        assert record.storage_root == "notes"
        assert record.name == "portastore.roots"
