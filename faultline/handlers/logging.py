"""
faultline.handlers.logging
~~~~~~~~~~~~~~~~~~~~~~~~~~

:copyright: (c) 2010-2012 by the Sentry Team, see AUTHORS for more details.
:license: BSD, see LICENSE for more details.
"""
import logging
import sys
import traceback

from faultline.base import Client
from faultline.utils.stacks import get_stack_info, iter_stack_frames

# loggers whose records would feed back into the client
INTERNAL_LOGGERS = ('faultline',)

# frames skipped when capturing the stack of a log call
SKIP_MODULES = ('faultline', 'logging')


class FaultlineHandler(logging.Handler, object):
    """
    Sends log records to faultline.

    >>> handler = FaultlineHandler(client, level=logging.ERROR)
    >>> logging.getLogger().addHandler(handler)

    Records carrying ``exc_info`` are reported as that exception, other
    records are reported with their message and the stack of the
    logging call.
    """

    def __init__(self, client=None, level=logging.NOTSET, **kwargs):
        if client is None:
            client = Client(**kwargs)
        elif not isinstance(client, Client):
            raise ValueError(
                'The first argument to %s must be a Client instance, got %r instead.' % (
                    self.__class__.__name__,
                    client,
                ))
        self.client = client

        logging.Handler.__init__(self, level=level)

    def can_record(self, record):
        return not any(
            record.name == name or record.name.startswith(name + '.')
            for name in INTERNAL_LOGGERS)

    def emit(self, record):
        try:
            self.format(record)

            # Avoid typical config issues by overriding loggers behavior
            if not self.can_record(record):
                print(record.message, file=sys.stderr)
                return

            return self._emit(record)
        except Exception:
            print('Top level faultline exception caught - failed creating log record',
                  file=sys.stderr)
            print(record.msg, file=sys.stderr)
            print(traceback.format_exc(), file=sys.stderr)

    def _emit(self, record):
        if record.exc_info and record.exc_info[1] is not None:
            error = record.exc_info[1]
        else:
            error = {
                'type': '',
                'message': record.getMessage(),
                'backtrace': get_stack_info(
                    iter_stack_frames(skip_modules=SKIP_MODULES)),
            }

        params = {
            'logger': record.name,
            'pathname': record.pathname,
            'lineno': record.lineno,
            'funcName': record.funcName,
        }
        extra = getattr(record, 'data', None)
        if isinstance(extra, dict):
            params.update(extra)

        return self.client.notify({
            'error': error,
            'context': {
                'severity': record.levelname.lower(),
                'component': record.name,
            },
            'params': params,
        })
