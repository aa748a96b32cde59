"""
faultline.exceptions
~~~~~~~~~~~~~~~~~~~~

:copyright: (c) 2010-2012 by the Sentry Team, see AUTHORS for more details.
:license: BSD, see LICENSE for more details.
"""


class FaultlineError(Exception):
    pass


class InvalidNotice(FaultlineError, ValueError):
    """
    Raised when ``notify`` is given something no error can be derived
    from, such as ``None`` or an empty string.
    """
    def __init__(self, value, literal=None):
        self.value = value
        if literal is None:
            literal = repr(value)
        super(InvalidNotice, self).__init__(
            'notify: got err=%s, wanted an Error' % (literal,))


class IgnoredNotice(FaultlineError):
    """
    Raised for messages which are known to carry no useful information
    and are never reported.
    """
    def __init__(self, message):
        self.message = message
        super(IgnoredNotice, self).__init__(
            'notify: ignoring unreportable error %r' % (message,))


class ConfigurationError(FaultlineError):
    pass


class APIError(FaultlineError):
    def __init__(self, message, code=0):
        self.code = code
        self.message = message
        super(APIError, self).__init__(message)

    def __str__(self):
        return self.message


class UnexpectedResponse(APIError):
    def __init__(self, code, body):
        self.body = body
        super(UnexpectedResponse, self).__init__(
            "faultline: unexpected response: code=%s body='%s'" % (code, body),
            code=code)
