import logging

from ec2_client.core.logger import LOGGER_NAME, REDACTED, Logger, SecretRedactingFilter, get_logger


def make_record(msg, *args):
    return logging.LogRecord(LOGGER_NAME, logging.INFO, __file__, 1, msg, args, None)


def test_filter_redacts_secret_in_arguments():
    record = make_record('signing with %s', 'topsecret')

    assert SecretRedactingFilter(['topsecret']).filter(record) is True
    assert record.getMessage() == f'signing with {REDACTED}'


def test_filter_leaves_clean_messages_alone():
    record = make_record('hello %s', 'world')
    SecretRedactingFilter(['topsecret']).filter(record)
    assert record.args == ('world',)


def test_uninitialized_logger_is_silent():
    logger = get_logger()
    assert logger.name == LOGGER_NAME
    assert logger.handlers


def test_initialized_logger_never_writes_secret(tmp_path):
    log_file = tmp_path / 'logs' / 'client.log'
    Logger.initialize(log_file, 'ERROR', secrets=['topsecret'])

    get_logger().info('secret is topsecret')
    for handler in get_logger().handlers:
        handler.flush()

    contents = log_file.read_text(encoding='utf-8')
    assert 'topsecret' not in contents
    assert REDACTED in contents


def test_initialize_is_idempotent(tmp_path):
    first = Logger.initialize(tmp_path / 'a.log')
    second = Logger.initialize(tmp_path / 'b.log')
    assert first is second
