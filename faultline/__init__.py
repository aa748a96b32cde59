"""
faultline
~~~~~~~~~

:copyright: (c) 2010-2012 by the Sentry Team, see AUTHORS for more details.
:license: BSD, see LICENSE for more details.
"""

__all__ = ('VERSION', 'Client', 'load')

VERSION = '0.1.0'

from faultline.base import *  # NOQA
from faultline.conf import *  # NOQA
