"""
The util module provides the sequence helpers used to enumerate entities and
hand out dofs, and the environment, logging and timing helpers behind
:func:`femdofs.cli.run`.
"""

from . import warnings
import contextlib
import datetime
import functools
import inspect
import os
import stringly
import sys
import traceback
import treelog


def cumsum(seq):
    'Running offsets of ``seq``, starting at 0 and excluding the total.'

    offset = 0
    for i in seq:
        yield offset
        offset += i


def unique(items, key=None):
    '''Deduplicate items in sequence.

    Return a tuple `(unique, indices)` such that `items[i] == unique[indices[i]]`.
    Items are compared by `key(item)` if a key is given, and unique items are
    kept in order of first occurrence. This is what numbers the edges and faces
    of a topology: the key is the sorted vertex tuple, the stored item the
    vertex tuple of the first cell that visits the entity.
    '''

    ids = {}
    unique = []
    indices = []
    for item in items:
        index = ids.setdefault(item if key is None else key(item), len(unique))
        if index == len(unique):
            unique.append(item)
        indices.append(index)
    return unique, indices


def defaults_from_env(f):
    '''Decorator for changing function defaults based on environment.

    Keyword defaults of annotated parameters are replaced by the value of
    environment variable ``FEMDOFS_<PARAM>``, deserialized with `Stringly
    <https://pypi.org/project/stringly/>`_. Values that fail to deserialize are
    ignored with a warning.'''

    sig = inspect.signature(f)
    overrides = {}
    for param in sig.parameters.values():
        value = os.environ.get(f'FEMDOFS_{param.name.upper()}')
        if value is None or param.annotation is param.empty or param.default is param.empty:
            continue
        try:
            overrides[param.name] = stringly.loads(param.annotation, value)
        except Exception as e:
            warnings.warn(f'ignoring environment variable FEMDOFS_{param.name.upper()}: {e}')
    if not overrides:
        return f
    sig = sig.replace(parameters=[param.replace(default=overrides[param.name]) if param.name in overrides else param for param in sig.parameters.values()])

    @functools.wraps(f)
    def defaults_from_env(*args, **kwargs):
        bound = sig.bind(*args, **kwargs)
        bound.apply_defaults()
        return f(*bound.args, **bound.kwargs)

    defaults_from_env.__signature__ = sig
    return defaults_from_env


def format_timedelta(d):
    'Duration as ``m:ss`` or ``h:mm:ss``.'

    h, s = divmod(int(d.total_seconds()), 3600)
    m, s = divmod(s, 60)
    return f'{h}:{m:02d}:{s:02d}' if h else f'{m}:{s:02d}'


@contextlib.contextmanager
def timeit():
    'Context that logs its start time and duration.'

    t0 = datetime.datetime.now()
    treelog.info(f'start {t0:%Y-%m-%d %H:%M:%S}')
    yield
    treelog.info(f'finish, elapsed {format_timedelta(datetime.datetime.now()-t0)}')


@contextlib.contextmanager
def log_traceback(gracefulexit: bool = True):
    '''Context that logs an escaping exception and exits with status 1.

    With ``gracefulexit`` disabled (``FEMDOFS_GRACEFULEXIT=no``) exceptions
    propagate unchanged, for instance to reach a debugger.'''

    if not gracefulexit:
        yield
        return
    try:
        yield
    except Exception as e:
        treelog.error(''.join(traceback.format_exception_only(type(e), e)).rstrip())
        treelog.debug(traceback.format_exc().rstrip())
        raise SystemExit(1) from e


def stdoutlog(richoutput: bool = sys.stdout.isatty(), verbose: int = 4):
    '''Context that sets a stdout logger showing messages up to level
    ``verbose`` (1 error, 2 warning, 3 user, 4 info, 5 debug).'''

    log = treelog.RichOutputLog() if richoutput else treelog.StdoutLog()
    levels = treelog.proto.Level.error, treelog.proto.Level.warning, treelog.proto.Level.user, treelog.proto.Level.info
    if 1 <= verbose <= len(levels):
        log = treelog.FilterLog(log, minlevel=levels[verbose-1])
    return treelog.set(log)


# vim:sw=4:sts=4:et
