# -*- coding: utf-8 -*-
from concurrent.futures import Future

import mock

from faultline.exceptions import ConfigurationError
from faultline.notice import ErrorRecord, Notice
from faultline.reporters.base import Dispatcher, Reporter, ReporterOptions
from faultline.utils.testutils import SpyReporter, TestCase

OPTIONS = ReporterOptions('myapp', 'secret', 'https://api.example.com/v0', 10000)


def make_notice():
    return Notice(errors=[ErrorRecord('ValueError', 'bad')])


class DispatcherTest(TestCase):
    def setUp(self):
        self.transport = SpyReporter()
        self.dispatcher = Dispatcher(transport=self.transport)

    def test_outcome_follows_transport(self):
        notice = make_notice()
        future = self.dispatcher.dispatch(notice, OPTIONS)

        self.assertResolved(future, notice)
        self.assertEqual(notice.id, 1)

    def test_uses_given_future(self):
        future = Future()

        self.assertIs(self.dispatcher.dispatch(make_notice(), OPTIONS, future), future)
        self.assertResolved(future)

    def test_pending_transport_keeps_future_pending(self):
        pending = []
        dispatcher = Dispatcher(transport=lambda n, o, f: pending.append(f))

        future = dispatcher.dispatch(make_notice(), OPTIONS)
        self.assertFalse(future.done())

        pending[0].set_exception(RuntimeError('late failure'))
        self.assertRejected(future, RuntimeError)

    def test_every_reporter_gets_same_notice_and_options(self):
        auxiliary = mock.Mock()
        self.dispatcher.add(auxiliary)
        notice = make_notice()

        self.dispatcher.dispatch(notice, OPTIONS)

        args = auxiliary.call_args[0]
        self.assertIs(args[0], notice)
        self.assertIs(args[1], OPTIONS)
        self.assertIsNot(args[2], self.transport.calls[0][2])

    def test_auxiliary_outcome_is_ignored(self):
        def reject(notice, options, future):
            future.set_exception(RuntimeError('auxiliary'))
        self.dispatcher.add(reject)

        future = self.dispatcher.dispatch(make_notice(), OPTIONS)

        self.assertResolved(future)

    def test_auxiliary_errors_go_to_hook(self):
        hook = mock.Mock()
        self.dispatcher.on_error = hook

        def broken(notice, options, future):
            raise RuntimeError('broken')

        def rejecting(notice, options, future):
            future.set_exception(KeyError('rejected'))

        self.dispatcher.add(broken)
        self.dispatcher.add(rejecting)
        with self.assertLogs('faultline.errors', level='ERROR'):
            self.dispatcher.dispatch(make_notice(), OPTIONS)

        self.assertEqual([c[0][0] for c in hook.call_args_list], [broken, rejecting])
        self.assertIsInstance(hook.call_args_list[0][0][1], RuntimeError)
        self.assertIsInstance(hook.call_args_list[1][0][1], KeyError)

    def test_failing_hook_is_not_load_bearing(self):
        self.dispatcher.on_error = mock.Mock(side_effect=Exception('hook'))
        self.dispatcher.add(mock.Mock(side_effect=RuntimeError('broken')))

        future = self.dispatcher.dispatch(make_notice(), OPTIONS)

        self.assertResolved(future)

    def test_raising_transport_rejects(self):
        dispatcher = Dispatcher(transport=mock.Mock(side_effect=RuntimeError('boom')))
        auxiliary = mock.Mock()
        dispatcher.add(auxiliary)

        future = dispatcher.dispatch(make_notice(), OPTIONS)

        self.assertRejected(future, RuntimeError)
        self.assertTrue(auxiliary.called)

    def test_missing_transport_rejects(self):
        future = Dispatcher().dispatch(make_notice(), OPTIONS)

        self.assertRejected(future, ConfigurationError)

    def test_iterates_transport_first(self):
        first, second = mock.Mock(), mock.Mock()
        self.dispatcher.add(first)
        self.dispatcher.add(second)

        self.assertEqual(list(self.dispatcher), [self.transport, first, second])
        self.assertEqual(len(self.dispatcher), 3)


class ReporterTest(TestCase):
    def test_report_errors_reject(self):
        class Broken(Reporter):
            def report(self, notice, options, future):
                raise ValueError('broken')

        future = Future()
        Broken()(make_notice(), OPTIONS, future)

        self.assertRejected(future, ValueError)

    def test_check_options(self):
        reporter = Reporter()

        reporter.check_options(OPTIONS)
        with self.assertRaises(ConfigurationError):
            reporter.check_options(ReporterOptions(None, None, None, 10000))
