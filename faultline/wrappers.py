"""
faultline.wrappers
~~~~~~~~~~~~~~~~~~

:copyright: (c) 2010-2012 by the Sentry Team, see AUTHORS for more details.
:license: BSD, see LICENSE for more details.
"""
import inspect
from functools import partial, update_wrapper

__all__ = ('wrap', 'call', 'is_wrapped', 'unwrap')

MARKER = '__faultline__'


def is_wrapped(fn):
    return getattr(fn, MARKER, False) is True


def unwrap(fn):
    while is_wrapped(fn):
        fn = fn.__inner__
    return fn


def _should_wrap(value):
    # callable objects and classes pass through untouched so their
    # attributes and isinstance checks keep working
    return (inspect.isfunction(value) or inspect.ismethod(value)
            or isinstance(value, partial))


def _wrap_argument(client, value):
    if _should_wrap(value):
        return wrap(client, value)
    return value


def _get_params(args, kwargs):
    params = {'arguments': list(args)}
    if kwargs:
        params['keyword_arguments'] = dict(kwargs)
    return params


def wrap(client, fn):
    """
    Returns a function which calls ``fn`` and reports any exception it
    raises through ``client.notify`` before raising it again. Callable
    arguments are wrapped as well, so callbacks handed to ``fn`` are
    covered too.

    The wrapper carries the attributes of ``fn`` and exposes it as
    ``__inner__``. Wrapping a wrapper returns it unchanged.
    """
    if is_wrapped(fn):
        return fn

    def wrapper(*args, **kwargs):
        wrapped_args = [_wrap_argument(client, a) for a in args]
        wrapped_kwargs = dict((k, _wrap_argument(client, v))
                              for k, v in kwargs.items())
        try:
            return fn(*wrapped_args, **wrapped_kwargs)
        except Exception as exc:
            client.notify({
                'error': exc,
                'params': _get_params(args, kwargs),
            })
            raise

    update_wrapper(wrapper, fn)
    setattr(wrapper, MARKER, True)
    wrapper.__inner__ = fn
    return wrapper


def call(client, fn, *args, **kwargs):
    return wrap(client, fn)(*args, **kwargs)
