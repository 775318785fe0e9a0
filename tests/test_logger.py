import json
import logging

import pytest
from colorama import Fore, Style

from wattpad.logger import ColorFormatter, Logger, setup_logging


@pytest.fixture
def restore_root():
    root = logging.getLogger()
    handlers, level = list(root.handlers), root.level
    yield root
    for h in list(root.handlers):
        root.removeHandler(h)
    for h in handlers:
        root.addHandler(h)
    root.setLevel(level)


def test_color_formatter_wraps_known_levels():
    fmt = ColorFormatter(fmt='%(message)s')
    record = logging.LogRecord('x', logging.WARNING, __file__, 1, 'careful', None, None)
    out = fmt.format(record)
    assert Fore.YELLOW in out
    assert out.endswith(Style.RESET_ALL)
    assert 'careful' in out


def test_setup_logging_inline_fallback(restore_root, tmp_path):
    assert setup_logging(logging.DEBUG, config_path=tmp_path / 'absent.json') is None
    assert restore_root.level == logging.DEBUG
    assert any(isinstance(h.formatter, ColorFormatter) for h in restore_root.handlers)


def test_setup_logging_from_dict_config(restore_root, tmp_path):
    path = tmp_path / 'log.config.json'
    path.write_text(json.dumps({
        'version': 1,
        'disable_existing_loggers': False,
        'handlers': {'null': {'class': 'logging.NullHandler'}},
        'root': {'handlers': ['null'], 'level': 'ERROR'},
    }), encoding='utf-8')
    assert setup_logging(logging.WARNING, config_path=path) == path
    # explicit level wins over the file
    assert restore_root.level == logging.WARNING


def test_bound_logger_uses_module_name(caplog):
    log = Logger.bind('wattpad.test')
    with caplog.at_level(logging.INFO, logger='wattpad.test'):
        log.info('hello')
        done = log.time_block('block')
        assert done() >= 0.0
    assert log.name == 'wattpad.test'
    assert [r.name for r in caplog.records if r.message == 'hello'] == ['wattpad.test']
