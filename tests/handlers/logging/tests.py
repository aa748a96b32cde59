import logging

import mock

from faultline.handlers.logging import FaultlineHandler
from faultline.utils.testutils import InMemoryClient, TestCase


class LoggingIntegrationTest(TestCase):
    def setUp(self):
        self.client = InMemoryClient()
        self.handler = FaultlineHandler(self.client, level=logging.WARNING)
        self.logger = logging.getLogger('app.orders')
        self.logger.addHandler(self.handler)
        self.logger.propagate = False

    def tearDown(self):
        self.logger.removeHandler(self.handler)
        self.logger.propagate = True

    def test_logger_basic(self):
        self.logger.error('order %s failed', 42)

        self.assertEqual(len(self.client.notices), 1)
        notice = self.client.notices[0]
        self.assertEqual(notice.error.type, '')
        self.assertEqual(notice.error.message, 'order 42 failed')
        self.assertEqual(notice.context['severity'], 'error')
        self.assertEqual(notice.context['component'], 'app.orders')
        self.assertEqual(notice.params['logger'], 'app.orders')
        self.assertEqual(notice.params['funcName'], 'test_logger_basic')

    def test_message_backtrace_starts_at_call_site(self):
        self.logger.warning('careful')

        frame = self.client.notices[0].error.backtrace[0]
        self.assertEqual(frame.function, 'test_message_backtrace_starts_at_call_site')

    def test_below_level_is_ignored(self):
        self.logger.info('fine')

        self.assertEqual(self.client.notices, [])

    def test_logger_exc_info(self):
        try:
            raise ValueError('bad order')
        except ValueError:
            self.logger.exception('order failed')

        notice = self.client.notices[0]
        self.assertEqual(notice.error.type, 'ValueError')
        self.assertEqual(notice.error.message, 'bad order')
        self.assertEqual(notice.error.backtrace[0].function, 'test_logger_exc_info')

    def test_logger_data(self):
        self.logger.critical('payment declined', extra={'data': {'order_id': 42}})

        notice = self.client.notices[0]
        self.assertEqual(notice.params['order_id'], 42)
        self.assertEqual(notice.context['severity'], 'critical')

    def test_keeps_client_context(self):
        self.logger.error('boom')

        self.assertIn('notifier', self.client.notices[0].context)


class FaultlineHandlerTest(TestCase):
    def test_invalid_first_arg_type(self):
        self.assertRaises(ValueError, FaultlineHandler, object())

    def test_can_record(self):
        handler = FaultlineHandler(InMemoryClient())

        def make(name):
            return logging.LogRecord(name, logging.ERROR, __file__, 1, 'msg', (), None)

        self.assertTrue(handler.can_record(make('app')))
        self.assertTrue(handler.can_record(make('faultlines')))
        self.assertFalse(handler.can_record(make('faultline')))
        self.assertFalse(handler.can_record(make('faultline.errors')))

    @mock.patch('sys.stderr')
    def test_internal_records_are_not_reported(self, stderr):
        client = InMemoryClient()
        handler = FaultlineHandler(client)

        handler.emit(logging.LogRecord(
            'faultline.errors', logging.ERROR, __file__, 1, 'loop', (), None))

        self.assertEqual(client.notices, [])
        self.assertTrue(stderr.write.called)

    @mock.patch('sys.stderr')
    def test_notify_failure_is_printed(self, stderr):
        client = InMemoryClient()
        handler = FaultlineHandler(client)

        with mock.patch.object(client, 'notify', side_effect=RuntimeError('down')):
            handler.emit(logging.LogRecord(
                'app', logging.ERROR, __file__, 1, 'msg', (), None))

        self.assertTrue(stderr.write.called)
