"""
faultline.notice
~~~~~~~~~~~~~~~~

:copyright: (c) 2010-2012 by the Sentry Team, see AUTHORS for more details.
:license: BSD, see LICENSE for more details.
"""

__all__ = ('Frame', 'ErrorRecord', 'Notice')


class Frame(object):
    """
    A single backtrace entry. Unknown fields are kept as empty values
    (``''`` or ``0``) so every frame serializes with the same keys.
    """

    def __init__(self, function='', file='', line=0, column=0):
        self.function = function or ''
        self.file = file or ''
        self.line = int(line or 0)
        self.column = int(column or 0)

    @classmethod
    def from_dict(cls, data):
        return cls(
            function=data.get('function'),
            file=data.get('file'),
            line=data.get('line'),
            column=data.get('column'),
        )

    def to_dict(self):
        return {
            'function': self.function,
            'file': self.file,
            'line': self.line,
            'column': self.column,
        }

    def __eq__(self, other):
        if not isinstance(other, Frame):
            return NotImplemented
        return self.to_dict() == other.to_dict()

    def __ne__(self, other):
        result = self.__eq__(other)
        if result is NotImplemented:
            return result
        return not result

    def __repr__(self):
        return '<%s: %s in %s:%s>' % (
            type(self).__name__, self.function, self.file, self.line)


class ErrorRecord(object):
    def __init__(self, type='', message='', backtrace=None):
        self.type = type or ''
        self.message = message or ''
        self.backtrace = list(backtrace or [])

    def to_dict(self):
        return {
            'type': self.type,
            'message': self.message,
            'backtrace': [frame.to_dict() for frame in self.backtrace],
        }

    def __repr__(self):
        return '<%s: %s: %s>' % (type(self).__name__, self.type, self.message)


class Notice(object):
    """
    The report handed to filters and reporters.

    >>> notice = Notice(errors=[ErrorRecord('ValueError', 'bad value')])
    >>> notice.params['user_id'] = 42
    """

    def __init__(self, errors=None, context=None, environment=None,
                 params=None, session=None, id=None):
        self.errors = list(errors or [])
        self.context = dict(context or {})
        self.environment = dict(environment or {})
        self.params = dict(params or {})
        self.session = dict(session or {})
        self.id = id

    @property
    def error(self):
        """The primary error record."""
        if not self.errors:
            return None
        return self.errors[0]

    def to_dict(self):
        return {
            'errors': [err.to_dict() for err in self.errors],
            'context': self.context,
            'environment': self.environment,
            'params': self.params,
            'session': self.session,
        }

    def __repr__(self):
        return '<%s: %r>' % (type(self).__name__, self.error)
