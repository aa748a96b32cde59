"""
faultline.reporters.threaded
~~~~~~~~~~~~~~~~~~~~~~~~~~~~

:copyright: (c) 2010-2012 by the Sentry Team, see AUTHORS for more details.
:license: BSD, see LICENSE for more details.
"""
import atexit
import logging
import os
import threading
import time
from queue import Queue

from faultline.reporters.requests import RequestsReporter

DEFAULT_TIMEOUT = 10

logger = logging.getLogger('faultline.errors')


class AsyncWorker(object):
    _terminator = object()

    def __init__(self, shutdown_timeout=DEFAULT_TIMEOUT):
        self._queue = Queue(-1)
        self._lock = threading.Lock()
        self._thread = None
        self.options = {
            'shutdown_timeout': shutdown_timeout,
        }
        self.start()

    def main_thread_terminated(self):
        size = self._queue.qsize()
        if size:
            timeout = self.options['shutdown_timeout']
            logger.info('faultline is attempting to send %s pending notices', size)
            logger.info('Waiting up to %s seconds', timeout)
            if os.name == 'nt':
                logger.info('Press Ctrl-Break to quit')
            else:
                logger.info('Press Ctrl-C to quit')
        self.stop(timeout=self.options['shutdown_timeout'])

    def start(self):
        """
        Starts the task thread.
        """
        with self._lock:
            if not self._thread:
                self._thread = threading.Thread(target=self._target,
                                                name='faultline.AsyncWorker')
                self._thread.daemon = True
                self._thread.start()
                atexit.register(self.main_thread_terminated)

    def is_alive(self):
        return self._thread is not None and self._thread.is_alive()

    def stop(self, timeout=None):
        """
        Stops the task thread. Synchronous!
        """
        with self._lock:
            if self._thread:
                self._queue.put_nowait(self._terminator)
                self._thread.join(timeout=timeout)
                self._thread = None
                atexit.unregister(self.main_thread_terminated)

    def queue(self, callback, *args, **kwargs):
        self._queue.put_nowait((callback, args, kwargs))

    def _target(self):
        while True:
            record = self._queue.get()
            try:
                if record is self._terminator:
                    break
                callback, args, kwargs = record
                try:
                    callback(*args, **kwargs)
                except Exception:
                    logger.error('Failed processing job', exc_info=True)
            finally:
                self._queue.task_done()

            time.sleep(0)

    def flush(self):
        """
        Blocks until every queued job has been processed.
        """
        self._queue.join()


class ThreadedRequestsReporter(RequestsReporter):
    """
    Sends notices from a background thread so ``notify`` never waits on
    the network. The returned future settles once the request finishes.
    """

    def __init__(self, shutdown_timeout=DEFAULT_TIMEOUT, **kwargs):
        super(ThreadedRequestsReporter, self).__init__(**kwargs)
        self.shutdown_timeout = shutdown_timeout
        self._worker = None

    def get_worker(self):
        if self._worker is None or not self._worker.is_alive():
            self._worker = AsyncWorker(shutdown_timeout=self.shutdown_timeout)
        return self._worker

    def send_sync(self, notice, options, future):
        try:
            super(ThreadedRequestsReporter, self).send(notice, options, future)
        except Exception as e:
            if future.done():
                raise
            future.set_exception(e)

    def send(self, notice, options, future):
        self.get_worker().queue(self.send_sync, notice, options, future)
