"""
faultline.reporters.base
~~~~~~~~~~~~~~~~~~~~~~~~

:copyright: (c) 2010-2012 by the Sentry Team, see AUTHORS for more details.
:license: BSD, see LICENSE for more details.
"""
import logging
from collections import namedtuple
from functools import partial

from faultline.deferred import Future, chain, get_error
from faultline.exceptions import ConfigurationError

__all__ = ('ReporterOptions', 'Reporter', 'Dispatcher')

logger = logging.getLogger('faultline.errors')

ReporterOptions = namedtuple(
    'ReporterOptions', ('project', 'api_key', 'endpoint', 'timeout'))


class Reporter(object):
    """
    All class based reporters should subclass this class.

    A reporter is called with the notice, the client's
    :class:`ReporterOptions` and a future, and must eventually settle the
    future with ``future.set_result(notice)`` or
    ``future.set_exception(error)``. Plain functions with the same
    signature work as reporters too.
    """

    def __call__(self, notice, options, future):
        try:
            self.report(notice, options, future)
        except Exception as e:
            if future.done():
                raise
            future.set_exception(e)

    def report(self, notice, options, future):
        """
        You need to override this to do something with the notice.
        Usually - this is sending it to a server
        """
        raise NotImplementedError

    def is_configured(self, options):
        return bool(options.project and options.api_key and options.endpoint)

    def check_options(self, options):
        if not self.is_configured(options):
            raise ConfigurationError(
                'faultline: project, api key and endpoint must be set '
                '(got project=%r, endpoint=%r)' % (options.project,
                                                   options.endpoint))


class Dispatcher(object):
    """
    Hands each notice to the transport reporter and then to every
    auxiliary reporter, in registration order.

    Only the transport decides the outcome seen by the caller. Auxiliary
    reporters which raise or reject are logged and passed to
    ``on_error(reporter, error)`` when it is set.
    """

    def __init__(self, transport=None, reporters=None, on_error=None):
        self.transport = transport
        self.on_error = on_error
        self._reporters = []
        for reporter in reporters or ():
            self.add(reporter)

    def add(self, reporter):
        self._reporters.append(reporter)

    def __iter__(self):
        if self.transport is not None:
            yield self.transport
        for reporter in self._reporters:
            yield reporter

    def __len__(self):
        return len(self._reporters) + (self.transport is not None)

    def dispatch(self, notice, options, future=None):
        if future is None:
            future = Future()

        outcome = Future()
        chain(outcome, future)

        if self.transport is None:
            outcome.set_exception(
                ConfigurationError('faultline: no transport reporter configured'))
        else:
            self._call_transport(notice, options, outcome)

        for reporter in self._reporters:
            self._call_auxiliary(reporter, notice, options)

        return future

    def _call_transport(self, notice, options, outcome):
        try:
            self.transport(notice, options, outcome)
        except Exception as e:
            logger.error('Transport reporter %r failed: %s', self.transport, e,
                         exc_info=True)
            if not outcome.done():
                outcome.set_exception(e)

    def _call_auxiliary(self, reporter, notice, options):
        outcome = Future()
        try:
            reporter(notice, options, outcome)
        except Exception as e:
            if outcome.done():
                self.handle_error(reporter, e)
            else:
                outcome.set_exception(e)
        outcome.add_done_callback(partial(self._check_outcome, reporter))

    def _check_outcome(self, reporter, future):
        error = get_error(future)
        if error is not None:
            self.handle_error(reporter, error)

    def handle_error(self, reporter, error):
        logger.error('Reporter %r failed: %s', reporter, error,
                     exc_info=(type(error), error, error.__traceback__))
        if self.on_error is None:
            return
        try:
            self.on_error(reporter, error)
        except Exception:
            logger.exception('on_reporter_error hook failed')
