"""
faultline.utils.testutils
~~~~~~~~~~~~~~~~~~~~~~~~~

:copyright: (c) 2010-2013 by the Sentry Team, see AUTHORS for more details.
:license: BSD, see LICENSE for more details.
"""
from unittest import TestCase as BaseTestCase

import faultline
from faultline.connectivity import ConnectivityMonitor


class TestCase(BaseTestCase):
    def assertResolved(self, future, value=None):
        self.assertTrue(future.done(), 'future is still pending')
        self.assertIsNone(future.exception())
        if value is not None:
            self.assertIs(future.result(), value)

    def assertRejected(self, future, exc_class=Exception):
        self.assertTrue(future.done(), 'future is still pending')
        error = future.exception()
        self.assertIsInstance(error, exc_class)
        return error


class SpyReporter(object):
    """
    Records every call and resolves the outcome, assigning
    sequential ids to the notices.
    """

    def __init__(self):
        self.calls = []

    def __call__(self, notice, options, future):
        self.calls.append((notice, options, future))
        notice.id = len(self.calls)
        future.set_result(notice)

    @property
    def called(self):
        return bool(self.calls)

    @property
    def notices(self):
        return [notice for notice, _, _ in self.calls]

    @property
    def last_notice(self):
        return self.calls[-1][0]

    @property
    def last_options(self):
        return self.calls[-1][1]


class InMemoryClient(faultline.Client):
    def __init__(self, **kwargs):
        self.reporter = kwargs.setdefault('reporter', SpyReporter())
        kwargs.setdefault('connectivity', ConnectivityMonitor())
        super(InMemoryClient, self).__init__(**kwargs)

    @property
    def notices(self):
        return self.reporter.notices
