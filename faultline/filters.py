"""
faultline.filters
~~~~~~~~~~~~~~~~~

A filter is any callable taking a :class:`~faultline.notice.Notice`.
It returns the notice (or a replacement) to keep reporting, ``True`` to
keep the current notice unchanged, or a falsy value to drop it.

:copyright: (c) 2010-2012 by the Sentry Team, see AUTHORS for more details.
:license: BSD, see LICENSE for more details.
"""
import re

from faultline.utils import varmap

__all__ = ('FilterChain', 'Filter', 'SanitizePasswordsFilter',
           'RemoveParamsFilter')


class FilterChain(object):
    """
    Runs filters in the order they were added. The first filter returning
    a falsy value stops the chain; every later filter sees the changes
    made by the earlier ones.
    """

    def __init__(self, filters=None):
        self._filters = []
        for fn in filters or ():
            self.add(fn)

    def add(self, fn):
        self._filters.append(fn)

    def __iter__(self):
        return iter(self._filters)

    def __len__(self):
        return len(self._filters)

    def run(self, notice):
        for fn in self._filters:
            result = fn(notice)
            if not result:
                return None
            if result is not True:
                notice = result
        return notice


class Filter(object):
    def __init__(self, client):
        self.client = client

    def __call__(self, notice):
        return self.process(notice)

    def get_data(self, notice):
        return

    def process(self, notice):
        resp = self.get_data(notice)
        if resp:
            notice = resp

        notice.params = self.filter_params(notice.params)
        notice.session = self.filter_session(notice.session)
        notice.environment = self.filter_environment(notice.environment)

        return notice

    def filter_params(self, data):
        return data

    def filter_session(self, data):
        return data

    def filter_environment(self, data):
        return data


class RemoveParamsFilter(Filter):
    """Removes call arguments and other params."""

    def filter_params(self, data):
        return {}


class SanitizePasswordsFilter(Filter):
    """
    Asterisk out things that look like passwords, credit card numbers,
    and API keys in params, session and environment data.
    """

    MASK = '*' * 8
    FIELDS = frozenset([
        'password',
        'secret',
        'passwd',
        'authorization',
        'api_key',
        'apikey',
        'access_token',
        'faultline_api_key',
    ])
    VALUES_RE = re.compile(r'^(?:\d[ -]*?){13,16}$')

    def sanitize(self, key, value):
        if value is None:
            return

        if isinstance(value, str) and self.VALUES_RE.match(value):
            return self.MASK

        if not key:  # key can be a NoneType
            return value

        # Just in case we have bytes here, we want to make them into text
        # properly without failing so we can perform our check.
        if isinstance(key, bytes):
            key = key.decode('utf-8', 'replace')
        else:
            key = str(key)

        key = key.lower()
        for field in self.FIELDS:
            if field in key:
                # store mask as a fixed length for security
                return self.MASK
        return value

    def filter_params(self, data):
        return varmap(self.sanitize, data)

    def filter_session(self, data):
        return varmap(self.sanitize, data)

    def filter_environment(self, data):
        return varmap(self.sanitize, data)
