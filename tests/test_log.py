"""
Tests for logging setup.
"""

import logging

import pytest

from territory_map.log import configure_logging


@pytest.fixture
def package_logger():
    logger = logging.getLogger("territory_map")
    saved = (logger.level, list(logger.handlers), logger.propagate)
    logger.handlers = []
    yield logger
    logger.setLevel(saved[0])
    logger.handlers = saved[1]
    logger.propagate = saved[2]


def test_single_handler(package_logger):
    configure_logging("debug")
    configure_logging("DEBUG")
    assert package_logger.level == logging.DEBUG
    assert len(package_logger.handlers) == 1


def test_unknown_level_falls_back_to_info(package_logger):
    configure_logging("chatty")
    assert package_logger.level == logging.INFO
