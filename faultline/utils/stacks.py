"""
faultline.utils.stacks
~~~~~~~~~~~~~~~~~~~~~~

Helpers which turn live frames, tracebacks and formatted traceback text
into :class:`faultline.notice.Frame` lists. Every list is ordered with
the innermost call first.

:copyright: (c) 2010-2012 by the Sentry Team, see AUTHORS for more details.
:license: BSD, see LICENSE for more details.
"""
import re
import sys
import traceback

from faultline.notice import Frame

_frame_re = re.compile(
    r'^\s*File "(?P<file>[^"]*)"'
    r'(?:, line (?P<line>\d+))?'
    r'(?:, in (?P<function>.+?))?\s*$')


def _getitem_from_frame(f_locals, key, default=None):
    """
    f_locals is not guaranteed to have .get(), but it will always
    support __getitem__. Even if it doesnt, we return ``default``.
    """
    try:
        return f_locals[key]
    except Exception:
        return default


def _module_matches(module_name, prefixes):
    for prefix in prefixes:
        if module_name == prefix or module_name.startswith(prefix + '.'):
            return True
    return False


def iter_stack_frames(frame=None, skip_modules=()):
    """
    Iterates outwards over the stack starting at ``frame`` (defaults to
    the caller). Leading frames whose module is in ``skip_modules`` are
    dropped, as is any frame containing the ``__traceback_hide__`` local
    variable.
    """
    if frame is None:
        frame = sys._getframe(1)
    return _iter_stack_frames(frame, tuple(skip_modules))


def _iter_stack_frames(frame, skip_modules):
    started = not skip_modules
    for frame, lineno in traceback.walk_stack(frame):
        if not started:
            f_globals = getattr(frame, 'f_globals', {})
            if _module_matches(f_globals.get('__name__') or '', skip_modules):
                continue
            started = True

        f_locals = getattr(frame, 'f_locals', {})
        if _getitem_from_frame(f_locals, '__traceback_hide__'):
            continue
        yield frame, lineno


def iter_traceback_frames(tb):
    """
    Given a traceback object, it will iterate over all
    frames that do not contain the ``__traceback_hide__``
    local variable, innermost frame first.
    """
    frames = []
    for frame, lineno in traceback.walk_tb(tb):
        # support for __traceback_hide__ which is used by a few libraries
        # to hide internal frames.
        f_locals = getattr(frame, 'f_locals', {})
        if not _getitem_from_frame(f_locals, '__traceback_hide__'):
            frames.append((frame, lineno))
    frames.reverse()
    return frames


def get_stack_info(frames):
    """
    Given a list of ``(frame, lineno)`` pairs, returns a list of
    :class:`Frame` objects. Python frames carry no column information,
    so ``column`` is always empty.
    """
    results = []
    for frame, lineno in frames:
        f_code = getattr(frame, 'f_code', None)
        if f_code:
            function = f_code.co_name
            filename = f_code.co_filename
        else:
            function = filename = None

        results.append(Frame(
            function=function,
            file=filename,
            line=lineno or getattr(frame, 'f_lineno', None),
        ))
    return results


def get_current_stack(skip_modules=()):
    """
    Captures the stack of the caller, skipping the leading frames which
    belong to ``skip_modules``.
    """
    return get_stack_info(iter_stack_frames(sys._getframe(1), skip_modules))


def get_traceback_info(tb):
    return get_stack_info(iter_traceback_frames(tb))


def parse_stack(text):
    """
    Parses a formatted Python traceback into frames. Lines which are not
    frame headers (source lines, the exception line) are ignored.

    >>> parse_stack(traceback.format_exc())
    [<Frame: handler in app.py:12>, <Frame: main in app.py:30>]
    """
    frames = []
    for line in (text or '').splitlines():
        match = _frame_re.match(line)
        if not match:
            continue
        frames.append(Frame(
            function=match.group('function'),
            file=match.group('file'),
            line=match.group('line'),
        ))
    # tracebacks are printed most recent call last
    frames.reverse()
    return frames
