import logging

import pytest

from .fakes import FakeBackend, RecordingReporter


@pytest.fixture(autouse=True)
def _reset_package_logger():
    yield
    logger = logging.getLogger("bcastmon")
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()
    logger.setLevel(logging.NOTSET)


@pytest.fixture
def backend():
    return FakeBackend()


@pytest.fixture
def reporter():
    return RecordingReporter()
