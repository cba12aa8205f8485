"""Shared fixtures."""

import logging

import pytest

from randomlib.log import configure_logging
from tests.fakes import FakeSource

configure_logging(logging.WARNING)


@pytest.fixture
def fake_source():
    return FakeSource()
