import functools

import mock

from faultline.utils.testutils import InMemoryClient, TestCase
from faultline.wrappers import call, is_wrapped, unwrap, wrap


class WrapTest(TestCase):
    def setUp(self):
        self.client = InMemoryClient()

    def test_wrapping_twice_returns_same_wrapper(self):
        wrapper = wrap(self.client, lambda: None)

        self.assertIs(wrap(self.client, wrapper), wrapper)

    def test_unwrap(self):
        def fn():
            pass

        self.assertIs(unwrap(wrap(self.client, fn)), fn)
        self.assertIs(unwrap(fn), fn)

    def test_keyword_callables_are_wrapped(self):
        received = {}

        def fn(callback=None):
            received['callback'] = callback

        def callback():
            pass

        wrap(self.client, fn)(callback=callback)

        self.assertTrue(is_wrapped(received['callback']))
        self.assertIs(received['callback'].__inner__, callback)

    def test_classes_are_not_wrapped(self):
        received = []
        wrap(self.client, received.append)(ValueError)

        self.assertIs(received[0], ValueError)

    def test_already_wrapped_arguments_are_passed_through(self):
        received = []
        callback = wrap(self.client, lambda: None)
        wrap(self.client, received.append)(callback)

        self.assertIs(received[0], callback)

    def test_nested_callback_errors_are_reported(self):
        def run_later(callback, value):
            return callback(value)

        def callback(value):
            raise ValueError(value)

        with self.assertRaises(ValueError):
            wrap(self.client, run_later)(callback, 'nested')

        # reported by the callback wrapper and again by the outer wrapper
        self.assertEqual(len(self.client.notices), 2)
        self.assertEqual(self.client.notices[0].params, {'arguments': ['nested']})
        self.assertEqual(self.client.notices[1].params['arguments'][1], 'nested')

    def test_keyword_arguments_are_reported(self):
        def fn(a, b=None):
            raise KeyError(a)

        with self.assertRaises(KeyError):
            wrap(self.client, fn)(1, b=2)

        self.assertEqual(self.client.notices[0].params, {
            'arguments': [1],
            'keyword_arguments': {'b': 2},
        })

    def test_base_exceptions_are_not_reported(self):
        def fn():
            raise KeyboardInterrupt()

        with self.assertRaises(KeyboardInterrupt):
            wrap(self.client, fn)()

        self.assertEqual(self.client.notices, [])

    def test_partial_can_be_wrapped(self):
        wrapper = wrap(self.client, functools.partial(max, 1))

        self.assertEqual(wrapper(5), 5)

    def test_original_exception_propagates_when_offline(self):
        self.client.connectivity.set_offline()

        def fn():
            raise ValueError('offline')

        with self.assertRaises(ValueError):
            wrap(self.client, fn)()

        self.assertEqual(len(self.client.pending), 1)


class CallTest(TestCase):
    def test_calls_once(self):
        client = InMemoryClient()
        fn = mock.Mock(return_value='result')

        self.assertEqual(call(client, fn, 1, key='value'), 'result')
        fn.assert_called_once_with(1, key='value')


class Greeter(object):
    def __call__(self):
        return 'hello'

    def name(self):
        return 'greeter'


class ArgumentWrappingTest(TestCase):
    def setUp(self):
        self.client = InMemoryClient()

    def test_callable_objects_are_passed_through(self):
        greeter = Greeter()
        received = []

        def fn(g):
            received.append(g)
            return g.name()

        self.assertEqual(wrap(self.client, fn)(greeter), 'greeter')
        self.assertIs(received[0], greeter)
        self.assertEqual(self.client.notices, [])

    def test_mocks_are_passed_through(self):
        callback = mock.Mock()
        received = []

        wrap(self.client, received.append)(callback)

        self.assertIs(received[0], callback)

    def test_builtins_are_passed_through(self):
        received = []

        wrap(self.client, received.append)(len)

        self.assertIs(received[0], len)

    def test_bound_methods_are_wrapped(self):
        greeter = Greeter()
        received = []

        wrap(self.client, received.append)(greeter.name)

        self.assertTrue(is_wrapped(received[0]))
        self.assertEqual(received[0](), 'greeter')

    def test_partials_are_wrapped(self):
        received = []

        wrap(self.client, received.append)(functools.partial(max, 1))

        self.assertTrue(is_wrapped(received[0]))
        self.assertEqual(received[0](3), 3)
