"""
faultline.conf
~~~~~~~~~~~~~~

:copyright: (c) 2010-2012 by the Sentry Team, see AUTHORS for more details.
:license: BSD, see LICENSE for more details.
"""
import logging
import os

from faultline.conf import defaults

__all__ = ('load', 'setup_logging')

EXCLUDE_LOGGER_DEFAULTS = (
    'faultline',
    'faultline.errors',
    'faultline.console',
)


def load(scope=None, environ=None):
    """
    Reads faultline settings from the environment and loads them
    into the given scope. Variables which are not set are skipped.

    >>> import faultline

    >>> # FAULTLINE_PROJECT=myapp FAULTLINE_API_KEY=secret
    >>> options = faultline.load()
    >>> options['project']
    'myapp'
    """
    if environ is None:
        environ = os.environ

    if scope is None:
        scope = {}

    for key, name in defaults.ENVIRON.items():
        value = environ.get(name)
        if not value:
            continue
        if key == 'timeout':
            try:
                value = int(value)
            except ValueError:
                raise ValueError('Invalid %s: %r' % (name, value))
        scope[key] = value

    return scope


def setup_logging(handler, exclude=EXCLUDE_LOGGER_DEFAULTS):
    """
    Configures logging to pipe to faultline.

    - ``exclude`` is a list of loggers that shouldn't go to faultline.

    >>> from faultline.handlers.logging import FaultlineHandler
    >>> client = Client(...)
    >>> setup_logging(FaultlineHandler(client))

    Returns a boolean based on if logging was configured or not.
    """
    logger = logging.getLogger()
    if handler.__class__ in map(type, logger.handlers):
        return False

    logger.addHandler(handler)

    # Add StreamHandler to faultline's default so you can catch missed exceptions
    for logger_name in exclude:
        logger = logging.getLogger(logger_name)
        logger.propagate = False
        if not logger.handlers:
            logger.addHandler(logging.StreamHandler())

    return True
