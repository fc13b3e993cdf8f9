"""Tests for the JSON log formatter."""

import json
import logging
import unittest

from utils.logging import JSONFormatter, setup_structured_logging


def _record(msg='hello', exc_info=None, **extra) -> logging.LogRecord:
    record = logging.LogRecord('test.logger', logging.INFO, __file__, 10, msg, None, exc_info)
    for key, value in extra.items():
        setattr(record, key, value)
    return record


class TestSetupStructuredLogging(unittest.TestCase):

    def setUp(self):
        self.root = logging.getLogger()
        self.saved = (self.root.handlers[:], self.root.level)

    def tearDown(self):
        self.root.handlers, level = self.saved
        self.root.setLevel(level)

    def test_installs_json_handler_at_requested_level(self):
        setup_structured_logging('debug')

        self.assertEqual(len(self.root.handlers), 1)
        self.assertIsInstance(self.root.handlers[0].formatter, JSONFormatter)
        self.assertEqual(self.root.level, logging.DEBUG)
        self.assertEqual(logging.getLogger('pymongo').level, logging.WARNING)


class TestJSONFormatter(unittest.TestCase):

    def setUp(self):
        self.formatter = JSONFormatter()

    def test_basic_fields(self):
        data = json.loads(self.formatter.format(_record()))

        self.assertEqual(data['level'], 'INFO')
        self.assertEqual(data['logger'], 'test.logger')
        self.assertEqual(data['message'], 'hello')
        self.assertTrue(data['timestamp'].endswith('Z'))

    def test_extra_fields_are_included(self):
        data = json.loads(self.formatter.format(_record(userId='u-1', path='/auth/status')))

        self.assertEqual(data['userId'], 'u-1')
        self.assertEqual(data['path'], '/auth/status')

    def test_secrets_are_redacted(self):
        data = json.loads(self.formatter.format(_record(password_hash='$2b$12$x', code='oauth-code')))

        self.assertEqual(data['password_hash'], '[REDACTED]')
        self.assertEqual(data['code'], '[REDACTED]')

    def test_nested_secrets_are_redacted(self):
        data = json.loads(self.formatter.format(_record(request={"path": "/auth/google/callback", "code": "abc"})))

        self.assertEqual(data["request"], {"path": "/auth/google/callback", "code": "[REDACTED]"})

    def test_non_json_values_are_stringified(self):
        from datetime import datetime, timezone
        when = datetime(2026, 1, 1, tzinfo=timezone.utc)

        data = json.loads(self.formatter.format(_record(at=when)))

        self.assertEqual(data['at'], str(when))

    def test_exception_is_formatted(self):
        try:
            raise RuntimeError('boom')
        except RuntimeError:
            import sys
            data = json.loads(self.formatter.format(_record(exc_info=sys.exc_info())))

        self.assertIn('RuntimeError: boom', data['exception'])


if __name__ == '__main__':
    unittest.main()
