"""
faultline.reporters.console
~~~~~~~~~~~~~~~~~~~~~~~~~~~

:copyright: (c) 2010-2012 by the Sentry Team, see AUTHORS for more details.
:license: BSD, see LICENSE for more details.
"""
import logging

from faultline.reporters.base import Reporter


def format_error(err):
    s = ['%s\n' % (err.message,)]

    for frame in err.backtrace:
        if frame.function:
            s.append(' at %s' % (frame.function,))
        if frame.file:
            s.append(' in %s:%s' % (frame.file, frame.line))
            if frame.column:
                s.append(':%s' % (frame.column,))
        s.append('\n')

    return ''.join(s)


class ConsoleReporter(Reporter):
    """
    Writes every error of a notice to the ``faultline.console`` logger.
    Useful as an auxiliary reporter during development:

    >>> client.add_reporter(ConsoleReporter())
    """

    def __init__(self, logger=None, level=logging.ERROR):
        self.logger = logger or logging.getLogger('faultline.console')
        self.level = level

    def report(self, notice, options, future):
        for err in notice.errors:
            self.logger.log(self.level, format_error(err))
        future.set_result(notice)
