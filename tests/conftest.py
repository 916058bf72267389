import logging

import pytest


@pytest.fixture(autouse=True)
def reset_package_logger():
    """Drop handlers installed by configure_logging between tests."""
    yield
    package_logger = logging.getLogger("gaekit")
    for handler in list(package_logger.handlers):
        if getattr(handler, "_gaekit_handler", False):
            package_logger.removeHandler(handler)
    package_logger.setLevel(logging.NOTSET)
