"""
faultline.events
~~~~~~~~~~~~~~~~

Turns whatever was handed to ``Client.notify`` into a :class:`Notice`.

Accepted inputs are:

- a string, reported as the message with the stack of the caller;
- an exception, with its traceback (and the exceptions it was chained to);
- an error-like mapping or object exposing ``message`` and optionally
  ``type`` and ``stack`` (formatted traceback text) or ``backtrace``;
- a wrapped error: a mapping with an ``error`` key holding any of the
  above, plus optional ``context``, ``environment``, ``params`` and
  ``session`` mappings which are merged into the notice.

:copyright: (c) 2010-2012 by the Sentry Team, see AUTHORS for more details.
:license: BSD, see LICENSE for more details.
"""
import copy
import json
import re
from collections.abc import Mapping

from faultline.exceptions import IgnoredNotice, InvalidNotice
from faultline.notice import ErrorRecord, Frame, Notice
from faultline.utils.stacks import (
    get_current_stack, get_traceback_info, parse_stack)

__all__ = ('normalize', 'is_wrapped_error', 'IGNORED_MESSAGES')

# Messages which browsers emit for cross-origin and permission failures;
# they never carry anything worth reporting.
IGNORED_MESSAGES = frozenset([
    'Script error',
    'InvalidAccessError',
])

NOTICE_FIELDS = ('context', 'environment', 'params', 'session')

UNCAUGHT_PREFIX = 'Uncaught '

_injector_re = re.compile(r'^\[(\$injector:[^\]]+)\]\s(.+)$', re.DOTALL)

# frames belonging to these modules are never part of a captured stack
INTERNAL_MODULES = ('faultline',)


def is_wrapped_error(value):
    return isinstance(value, Mapping) and 'error' in value


def _literal(value):
    try:
        return json.dumps(value)
    except (TypeError, ValueError):
        return repr(value)


def _check_reportable(value):
    if value is None or value is False or (isinstance(value, str) and not value):
        raise InvalidNotice(value, literal=_literal(value))


def normalize(value, context=None):
    """
    Builds a :class:`Notice` from ``value``. ``context`` holds the
    defaults the notice context starts from.

    Raises :class:`InvalidNotice` when no error can be derived from
    ``value`` and :class:`IgnoredNotice` for known unreportable messages.
    """
    if is_wrapped_error(value):
        notice = normalize(value['error'], context)
        for name in NOTICE_FIELDS:
            data = value.get(name)
            if data:
                getattr(notice, name).update(data)
        return notice

    _check_reportable(value)

    errors = get_error_records(value)
    if errors[0].message in IGNORED_MESSAGES:
        raise IgnoredNotice(errors[0].message)

    for record in errors:
        split_message(record)

    return Notice(errors=errors, context=copy.deepcopy(context))


def get_error_records(value):
    if isinstance(value, str):
        return [ErrorRecord(
            message=value,
            backtrace=get_current_stack(INTERNAL_MODULES),
        )]

    if isinstance(value, BaseException):
        return get_exception_records(value)

    if isinstance(value, Mapping):
        getter = value.get
    elif hasattr(value, 'message'):
        def getter(key):
            return getattr(value, key, None)
    else:
        raise InvalidNotice(value, literal=_literal(value))

    return [ErrorRecord(
        type=getter('type'),
        message=_to_text(getter('message')),
        backtrace=get_backtrace(getter('backtrace'), getter('stack')),
    )]


def get_exception_records(exc):
    """
    Returns one record for ``exc`` followed by one for each exception it
    was raised from or while handling.
    """
    records = []
    seen = set()
    while exc is not None and id(exc) not in seen:
        seen.add(id(exc))
        if exc.__traceback__ is not None:
            backtrace = get_traceback_info(exc.__traceback__)
        elif not records:
            # never raised; the notify call site is the best we have
            backtrace = get_current_stack(INTERNAL_MODULES)
        else:
            backtrace = []
        records.append(ErrorRecord(
            type=type(exc).__name__,
            message=_to_text(exc),
            backtrace=backtrace,
        ))
        if exc.__cause__ is not None:
            exc = exc.__cause__
        elif not exc.__suppress_context__:
            exc = exc.__context__
        else:
            exc = None
    return records


def get_backtrace(backtrace, stack):
    if backtrace:
        return [frame if isinstance(frame, Frame) else Frame.from_dict(frame)
                for frame in backtrace]
    if stack:
        return parse_stack(stack)
    return []


def split_message(record):
    """
    Pulls the error type out of messages which embed it, such as
    ``Uncaught TypeError: x is undefined`` or
    ``[$injector:undef] Provider ... must return a value``.
    """
    message = record.message

    if message.startswith(UNCAUGHT_PREFIX):
        rest = message[len(UNCAUGHT_PREFIX):]
        type_, sep, detail = rest.partition(': ')
        if sep:
            record.type, record.message = type_, detail
        else:
            record.type, record.message = '', rest
        return record

    match = _injector_re.match(message)
    if match:
        record.type, record.message = match.group(1), match.group(2)
    return record


def _to_text(value):
    if value is None:
        return ''
    try:
        return str(value)
    except Exception:
        return '<unprintable %s object>' % type(value).__name__
