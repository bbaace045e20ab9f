"""Tests for logging helpers."""
import logging

import pytest

from ittypy import setup_logging
from ittypy.core.logging import get_logger


@pytest.fixture(autouse=True)
def restore_levels():
    """Reset ittypy logger levels after each test."""
    names = ['ittypy', 'ittypy.api', 'ittypy.upload', 'ittypy.tasks']
    saved = {name: logging.getLogger(name).level for name in names}
    yield
    for name, level in saved.items():
        logging.getLogger(name).setLevel(level)


def test_get_logger_returns_named_logger():
    logger = get_logger('ittypy.upload')

    assert logger.name == 'ittypy.upload'
    assert logger.propagate


def test_get_logger_is_cached():
    assert get_logger('ittypy.api') is logging.getLogger('ittypy.api')


def test_setup_logging_sets_level():
    setup_logging(logging.DEBUG)

    assert logging.getLogger('ittypy').level == logging.DEBUG
    assert logging.getLogger('ittypy.tasks').level == logging.DEBUG


@pytest.mark.asyncio
async def test_credential_not_logged(caplog, api_client, fake_session):
    fake_session.queue(200, {'ok': True})
    setup_logging(logging.DEBUG)

    with caplog.at_level(logging.DEBUG, logger='ittypy.api'):
        await api_client.request('GET', 'tasks/task_1')

    assert 'sk_test_123' not in caplog.text
    assert 'tasks/task_1' in caplog.text
