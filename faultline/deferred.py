"""
faultline.deferred
~~~~~~~~~~~~~~~~~~

Outcomes travel through the pipeline as :class:`concurrent.futures.Future`
instances. ``Client.notify`` returns one, and every reporter is handed a
fresh one which it must settle with ``set_result`` or ``set_exception``.

:copyright: (c) 2010-2012 by the Sentry Team, see AUTHORS for more details.
:license: BSD, see LICENSE for more details.
"""
from concurrent.futures import CancelledError, Future

__all__ = ('Future', 'resolved', 'rejected', 'chain', 'get_error')


def resolved(value=None):
    future = Future()
    future.set_result(value)
    return future


def rejected(error):
    future = Future()
    future.set_exception(error)
    return future


def get_error(future):
    """
    Returns the exception a settled future was rejected with, or ``None``.
    Cancellation counts as a rejection.
    """
    if future.cancelled():
        return CancelledError()
    return future.exception()


def chain(source, target):
    """
    Settles ``target`` with the outcome of ``source`` once ``source`` is
    done. ``target`` is left alone if something else settled it first.

    >>> outcome = chain(reporter_future, Future())
    """
    def copy_outcome(future):
        if target.done():
            return
        error = get_error(future)
        if error is not None:
            target.set_exception(error)
        else:
            target.set_result(future.result())

    source.add_done_callback(copy_outcome)
    return target
