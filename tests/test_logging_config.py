import json
import logging
import sys

import pytest

from gcp_inventory_exporter.utils.logging_config import (
    LOGGER_NAME, BufferHandler, StructuredFormatter, get_logger, log_execution_time, setup_logging
)


@pytest.fixture
def restore_logging():
    root = logging.getLogger()
    package = logging.getLogger(LOGGER_NAME)
    saved = (list(root.handlers), root.level, package.level, package.propagate)
    yield
    for logger in (package, logging.getLogger('google'), logging.getLogger('urllib3')):
        for handler in list(logger.handlers):
            logger.removeHandler(handler)
            handler.close()
        logger.propagate = True
        logger.setLevel(logging.NOTSET)
    for handler in list(root.handlers):
        if handler not in saved[0]:
            root.removeHandler(handler)
            handler.close()
    for handler in saved[0]:
        if handler not in root.handlers:
            root.addHandler(handler)
    root.setLevel(saved[1])
    package.setLevel(saved[2])
    package.propagate = saved[3]


def test_json_log_file(tmp_path, restore_logging):
    log_file = tmp_path / 'logs' / 'inventory.log'
    setup_logging(log_level='debug', log_file=str(log_file), log_format='json')

    get_logger('collection').error(
        'Failed to get routes inventory',
        extra={'resource_kind': 'routes', 'project_id': 'p1', 'scope': 'global'}
    )
    for handler in logging.getLogger(LOGGER_NAME).handlers:
        handler.flush()

    entry = json.loads(log_file.read_text().splitlines()[-1])
    assert entry['level'] == 'ERROR'
    assert entry['logger'] == 'gcp_inventory_exporter.collection'
    assert entry['project_id'] == 'p1'
    assert entry['resource_kind'] == 'routes'
    assert logging.getLogger(LOGGER_NAME).level == logging.DEBUG
    assert logging.getLogger('google').level == logging.WARNING


def test_structured_formatter_includes_exception():
    try:
        raise RuntimeError('boom')
    except RuntimeError:
        record = logging.getLogger('tests').makeRecord(
            'tests', logging.ERROR, __file__, 1, 'failed', None, exc_info=sys.exc_info()
        )

    data = json.loads(StructuredFormatter().format(record))

    assert data['message'] == 'failed'
    assert 'RuntimeError: boom' in data['exception']


def test_buffer_handler_drain():
    logger = logging.getLogger('tests.buffer')
    logger.setLevel(logging.INFO)
    handler = BufferHandler()
    logger.addHandler(handler)
    try:
        logger.info('first')
        logger.warning('second')
    finally:
        logger.removeHandler(handler)

    lines = handler.drain()
    assert len(lines) == 2
    assert lines[0].endswith('first')
    assert 'WARNING' in lines[1]
    assert handler.drain() == []


def test_get_logger_names():
    assert get_logger().name == 'gcp_inventory_exporter'
    assert get_logger('discovery').name == 'gcp_inventory_exporter.discovery'


class Timed:
    def __init__(self, logger):
        self.logger = logger

    @log_execution_time
    def ok(self):
        return 42

    @log_execution_time
    def fails(self):
        raise ValueError('bad input')


def test_log_execution_time(test_logger, caplog):
    timed = Timed(test_logger)

    assert timed.ok() == 42
    with pytest.raises(ValueError):
        timed.fails()

    assert 'Timed.ok completed' in caplog.text
    assert 'Timed.fails failed' in caplog.text
