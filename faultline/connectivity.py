"""
faultline.connectivity
~~~~~~~~~~~~~~~~~~~~~~

:copyright: (c) 2010-2012 by the Sentry Team, see AUTHORS for more details.
:license: BSD, see LICENSE for more details.
"""
import logging
from collections import deque

__all__ = ('ConnectivityMonitor', 'PendingQueue')

logger = logging.getLogger('faultline.errors')


class ConnectivityMonitor(object):
    """
    Tracks whether the host currently has network connectivity.

    The host application owns the monitor and drives it from whatever
    tells it about the network (a health check, a platform callback, ...)
    by calling :meth:`set_online` and :meth:`set_offline`. Clients
    subscribe to transitions.

    >>> monitor = ConnectivityMonitor(online=False)
    >>> client = Client(connectivity=monitor)
    >>> client.notify('queued until the network is back')
    >>> monitor.set_online()  # flushes the queued notice
    """
    ONLINE = 1
    OFFLINE = 0

    def __init__(self, online=True):
        self.status = self.ONLINE if online else self.OFFLINE
        self._listeners = []

    @property
    def online(self):
        return self.status == self.ONLINE

    def subscribe(self, callback):
        """
        Calls ``callback(online)`` on every transition.
        """
        self._listeners.append(callback)
        return callback

    def unsubscribe(self, callback):
        try:
            self._listeners.remove(callback)
        except ValueError:
            pass

    def set_online(self):
        self._transition(self.ONLINE)

    def set_offline(self):
        self._transition(self.OFFLINE)

    def _transition(self, status):
        if status == self.status:
            return
        self.status = status
        online = self.online
        for callback in list(self._listeners):
            try:
                callback(online)
            except Exception:
                logger.error('Connectivity listener %r failed', callback,
                             exc_info=True)


class PendingQueue(object):
    """
    Notices waiting for connectivity, in the order they were reported.
    """

    def __init__(self):
        self._items = deque()

    def put(self, notice, options, future):
        self._items.append((notice, options, future))

    def drain(self):
        """
        Removes and returns every queued entry, oldest first.
        """
        items, self._items = list(self._items), deque()
        return items

    def __len__(self):
        return len(self._items)

    def __iter__(self):
        return iter(list(self._items))
