"""
faultline.reporters
~~~~~~~~~~~~~~~~~~~

:copyright: (c) 2010-2012 by the Sentry Team, see AUTHORS for more details.
:license: BSD, see LICENSE for more details.
"""
from faultline.reporters.base import Dispatcher, Reporter, ReporterOptions  # NOQA
from faultline.reporters.console import ConsoleReporter  # NOQA
from faultline.reporters.requests import RequestsReporter  # NOQA
from faultline.reporters.threaded import ThreadedRequestsReporter  # NOQA
