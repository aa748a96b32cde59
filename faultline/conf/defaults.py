"""
faultline.conf.defaults
~~~~~~~~~~~~~~~~~~~~~~~

Represents the default values for all faultline settings.

:copyright: (c) 2010-2012 by the Sentry Team, see AUTHORS for more details.
:license: BSD, see LICENSE for more details.
"""
import socket

# Project name and API key used to authenticate with the faultline server
PROJECT = None
API_KEY = None

# Base URL of the faultline API, e.g. https://api.example.com/v0
ENDPOINT = None

# Transport timeout, in milliseconds
TIMEOUT = 10000

# Not all environments have access to socket module, for example Google App Engine
# Need to check to see if the socket module has ``gethostname``, if it doesn't we
# will set it to None and require it passed in to ``Client`` on initializtion.
NAME = socket.gethostname() if hasattr(socket, 'gethostname') else None

# Transport reporter used when ``Client`` is not given one
REPORTER = 'faultline.reporters.threaded.ThreadedRequestsReporter'

# Auxiliary reporters invoked after the transport
REPORTERS = ()

# Client-side filters to apply
FILTERS = ()

NOTIFIER_NAME = 'faultline-python'
NOTIFIER_URL = 'https://github.com/faultline/faultline-python'

# Environment variables read by ``faultline.conf.load``
ENVIRON = {
    'project': 'FAULTLINE_PROJECT',
    'api_key': 'FAULTLINE_API_KEY',
    'endpoint': 'FAULTLINE_ENDPOINT',
    'timeout': 'FAULTLINE_TIMEOUT',
}
