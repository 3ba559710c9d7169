import json
import logging
from clusterwipe.core.logging import ContextLogger, JSONFormatter, get_logger, get_run_id, setup_logging

def _record(**extra):
    record = logging.LogRecord('clusterwipe', logging.DEBUG, __file__, 1, 'checking tags', None, None)
    for key, value in extra.items():
        setattr(record, key, value)
    return record

def test_json_formatter_includes_context_fields():
    record = _record(cluster_id='abc', engine='AWS RDS Engine', resource_id='db-1', dry_run=True)
    entry = json.loads(JSONFormatter().format(record))
    assert entry['message'] == 'checking tags'
    assert entry['level'] == 'DEBUG'
    assert entry['run_id'] == get_run_id()
    assert entry['cluster_id'] == 'abc'
    assert entry['engine'] == 'AWS RDS Engine'
    assert entry['resource_id'] == 'db-1'
    assert entry['dry_run'] is True

def test_json_formatter_omits_absent_fields():
    entry = json.loads(JSONFormatter().format(_record()))
    assert 'resource_id' not in entry

def test_with_fields_merges_context(caplog):
    log = ContextLogger(logging.getLogger('clusterwipe.test'), {'cluster_id': 'abc'})
    child = log.with_fields(resource_id='db-1')
    with caplog.at_level(logging.DEBUG, logger='clusterwipe.test'):
        child.debug('hello', extra={'engine': 'e1'})
    record = caplog.records[-1]
    assert record.cluster_id == 'abc'
    assert record.resource_id == 'db-1'
    assert record.engine == 'e1'
    assert 'resource_id' not in log.extra

def test_get_logger_wraps_injected_logger():
    base = logging.getLogger('clusterwipe.injected')
    log = get_logger(base, engine='e1')
    assert log.logger is base
    assert log.extra == {'engine': 'e1'}
    adapter = logging.LoggerAdapter(base, {'cluster_id': 'abc'})
    assert get_logger(adapter, engine='e1').extra == {'cluster_id': 'abc', 'engine': 'e1'}

def test_setup_logging_installs_record_factory_once():
    original_factory = logging.getLogRecordFactory()
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    try:
        setup_logging(verbosity=2)
        factory = logging.getLogRecordFactory()
        setup_logging(verbosity=1, json_format=True)
        assert logging.getLogRecordFactory() is factory
        record = factory('clusterwipe', logging.INFO, __file__, 1, 'msg', None, None)
        assert record.run_id == get_run_id()
    finally:
        logging.setLogRecordFactory(original_factory)
        root.handlers[:] = handlers
        root.setLevel(level)
