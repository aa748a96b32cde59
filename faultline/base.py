"""
faultline.base
~~~~~~~~~~~~~~

:copyright: (c) 2010-2012 by the Sentry Team, see AUTHORS for more details.
:license: BSD, see LICENSE for more details.
"""
import logging
import os
import platform
import sys

import faultline
from faultline.conf import defaults, load
from faultline.connectivity import ConnectivityMonitor, PendingQueue
from faultline.deferred import Future
from faultline.events import normalize
from faultline.exceptions import FaultlineError
from faultline.filters import FilterChain
from faultline.reporters.base import Dispatcher, ReporterOptions
from faultline.utils import merge_dicts
from faultline.utils.imports import import_string
from faultline import wrappers

__all__ = ('Client',)


class Client(object):
    """
    The faultline client. Normalizes errors into notices, runs them
    through the registered filters and hands them to the reporters,
    holding them back while the host is offline.

    Will read default configuration from the environment variables
    ``FAULTLINE_PROJECT``, ``FAULTLINE_API_KEY``, ``FAULTLINE_ENDPOINT``
    and ``FAULTLINE_TIMEOUT`` if available.

    >>> from faultline import Client

    >>> client = Client('myapp', 'api-key', 'https://api.example.com/v0')

    >>> # Record an exception
    >>> try:
    >>>     1/0
    >>> except ZeroDivisionError as exc:
    >>>     notice = client.notify(exc).result(timeout=5)
    >>>     print("Exception reported; reference is %s" % notice.id)
    """
    logger = logging.getLogger('faultline')

    def __init__(self, project=None, api_key=None, endpoint=None, **options):
        o = options

        self.configure_logging()

        cls = self.__class__
        self.logger = logging.getLogger(
            '%s.%s' % (cls.__module__, cls.__name__))
        self.error_logger = logging.getLogger('faultline.errors')

        environ_config = load()
        if environ_config:
            self.logger.debug(
                'Configuring faultline from environment: %s',
                ', '.join(sorted(environ_config)))

        self.project = project or environ_config.get('project', defaults.PROJECT)
        self.api_key = api_key or environ_config.get('api_key', defaults.API_KEY)
        self.endpoint = endpoint or environ_config.get('endpoint', defaults.ENDPOINT)
        self.timeout = int(
            o.get('timeout') or environ_config.get('timeout') or defaults.TIMEOUT)

        self.context = merge_dicts(self.get_default_context(), o.get('context'))

        self.filters = FilterChain()
        for fn in o.get('filters') or defaults.FILTERS:
            self.add_filter(fn)

        reporter = o.get('reporter') or defaults.REPORTER
        self.dispatcher = Dispatcher(
            transport=self._load(reporter, with_client=False),
            on_error=o.get('on_reporter_error'),
        )
        for reporter in o.get('reporters') or defaults.REPORTERS:
            self.add_reporter(reporter)

        self.pending = PendingQueue()
        self.connectivity = o.get('connectivity') or ConnectivityMonitor()
        self.connectivity.subscribe(self._connectivity_changed)

        if not self.is_enabled():
            self.logger.info(
                'faultline is not configured (notices will be rejected by the '
                'transport). Call set_project() or set FAULTLINE_PROJECT, '
                'FAULTLINE_API_KEY and FAULTLINE_ENDPOINT.')

    def configure_logging(self):
        logger = logging.getLogger('faultline')
        if logger.handlers:
            return
        logger.addHandler(logging.StreamHandler())
        logger.setLevel(logging.INFO)

    def _load(self, value, with_client=True):
        """
        Resolves a dotted path to an object; classes are instantiated,
        filters with the client as their only argument.
        """
        if isinstance(value, str):
            value = import_string(value)
        if isinstance(value, type):
            value = value(self) if with_client else value()
        return value

    def get_default_context(self):
        return {
            'language': 'Python/%s' % (platform.python_version(),),
            'notifier': {
                'name': defaults.NOTIFIER_NAME,
                'version': faultline.VERSION,
                'url': defaults.NOTIFIER_URL,
            },
            'hostname': defaults.NAME,
            'rootDirectory': os.getcwd(),
        }

    def is_enabled(self):
        """
        Return a boolean describing whether the transport has what it
        needs to send notices.
        """
        return bool(self.project and self.api_key and self.endpoint)

    def set_project(self, project, api_key, endpoint=None):
        self.project = project
        self.api_key = api_key
        if endpoint is not None:
            self.endpoint = endpoint

    def get_options(self):
        return ReporterOptions(
            project=self.project,
            api_key=self.api_key,
            endpoint=self.endpoint,
            timeout=self.timeout,
        )

    def add_filter(self, fn):
        """
        Adds a filter run on every notice before it is reported.

        >>> def drop_timeouts(notice):
        >>>     if notice.error.type == 'Timeout':
        >>>         return None
        >>>     notice.context['environment'] = 'production'
        >>>     return notice
        >>> client.add_filter(drop_timeouts)
        """
        self.filters.add(self._load(fn))

    def add_reporter(self, fn):
        self.dispatcher.add(self._load(fn, with_client=False))

    def notify(self, err):
        """
        Reports ``err`` and returns a future for the outcome.

        The future resolves with the notice once the transport accepted
        it, resolves with ``None`` when a filter dropped it, and is
        rejected when ``err`` cannot be reported or delivery failed.
        While offline the notice is queued and the future stays pending
        until connectivity returns.

        >>> client.notify('Something unexpected happened')
        >>> client.notify({'error': exc, 'params': {'order_id': 42}})
        """
        future = Future()

        try:
            notice = normalize(err, context=self.context)
            notice = self.filters.run(notice)
        except FaultlineError as e:
            self.logger.debug('Not reporting: %s', e)
            future.set_exception(e)
            return future
        except Exception as e:
            self.error_logger.error('Failed to build notice: %s', e,
                                    exc_info=True)
            future.set_exception(e)
            return future

        if notice is None:
            self.logger.debug('Notice was dropped by a filter')
            future.set_result(None)
            return future

        options = self.get_options()
        if not self.connectivity.online:
            self.logger.debug('Offline, queueing notice %r', notice)
            self.pending.put(notice, options, future)
            return future

        return self.dispatcher.dispatch(notice, options, future)

    def flush(self):
        """
        Dispatches every queued notice in the order it was reported.
        """
        items = self.pending.drain()
        if items:
            self.logger.debug('Back online, sending %d queued notices',
                              len(items))
        for notice, options, future in items:
            self.dispatcher.dispatch(notice, options, future)

    def _connectivity_changed(self, online):
        if online:
            self.flush()

    def close(self):
        """
        Detaches the client from its connectivity monitor. Notices still
        queued stay pending until :meth:`flush` is called.
        """
        self.connectivity.unsubscribe(self._connectivity_changed)

    def wrap(self, fn):
        """
        Returns a wrapper around ``fn`` which reports exceptions before
        re-raising them. Works as a decorator:

        >>> @client.wrap
        >>> def handler(event, callback):
        >>>     ...
        """
        return wrappers.wrap(self, fn)

    def call(self, fn, *args, **kwargs):
        """
        Calls ``fn`` once, reporting and re-raising any exception.

        >>> client.call(process_order, order_id, retry=False)
        """
        return wrappers.call(self, fn, *args, **kwargs)

    def install_sys_hook(self):
        """
        Reports uncaught exceptions before handing them to the previous
        ``sys.excepthook``.
        """
        previous = sys.excepthook

        def handle_exception(*exc_info):
            if not issubclass(exc_info[0], KeyboardInterrupt):
                self.notify({
                    'error': exc_info[1],
                    'context': {'severity': 'critical'},
                })
            previous(*exc_info)

        sys.excepthook = handle_exception
        return previous
