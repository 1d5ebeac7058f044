"""
The cli (command line interface) module provides :func:`run`, which calls a
function with keyword arguments taken from the command line.

Arguments are passed as ``name=value`` and deserialized with `Stringly
<https://pypi.org/project/stringly/>`_ according to the annotation (or, if
absent, the type of the default) of the parameter; a bare ``name`` switches a
boolean parameter on. The call runs inside a stdout treelog logger that
records the arguments and the duration, and reports uncaught exceptions
before exiting. Output is configured through the environment variables
``FEMDOFS_RICHOUTPUT``, ``FEMDOFS_VERBOSE`` and ``FEMDOFS_GRACEFULEXIT``.
"""

from . import _util as util, warnings
import inspect
import stringly
import sys
import treelog


def _parameter_types(f):
    types = {}
    for param in inspect.signature(f).parameters.values():
        if param.kind not in (param.POSITIONAL_OR_KEYWORD, param.KEYWORD_ONLY):
            raise ValueError(f'argument {param.name!r} cannot be passed by keyword')
        if param.annotation is not param.empty:
            types[param.name] = param.annotation
        elif param.default is not param.empty:
            types[param.name] = type(param.default)
        else:
            raise ValueError(f'cannot determine type for argument {param.name!r}')
    return types


def run(f, *, argv=None):
    '''Call ``f`` with arguments parsed from ``argv`` (default: ``sys.argv``).

    Returns the return value of ``f``. Invalid arguments, and ``-h`` or
    ``--help``, exit with a usage message.'''

    progname, *args = argv or sys.argv
    types = _parameter_types(f)
    defaults = {name: param.default for name, param in inspect.signature(f).parameters.items() if param.default is not param.empty}
    usage = ' '.join([f'USAGE: {progname}', *(f'[{name}={stringly.dumps(types[name], defaults[name])}]' if name in defaults else f'{name}=...' for name in types)])

    if '-h' in args or '--help' in args:
        doc = inspect.getdoc(f)
        sys.exit(f'{usage}\n\n{doc}' if doc else usage)

    kwargs = dict(defaults)
    for arg in args:
        name, sep, value = arg.partition('=')
        if name not in types:
            sys.exit(f'{usage}\n\nError: invalid argument {name!r}')
        if not sep:
            if types[name] is not bool:
                sys.exit(f'{usage}\n\nError: argument {name!r} requires a value')
            value = 'yes'
        try:
            kwargs[name] = stringly.loads(types[name], value)
        except Exception as e:
            sys.exit(f'{usage}\n\nError: invalid value {value!r} for {name}: {e}')
    for name in types:
        if name not in kwargs:
            sys.exit(f'{usage}\n\nError: missing argument {name}')

    # output settings are read from the environment on every call
    stdoutlog = util.defaults_from_env(util.stdoutlog)
    log_traceback = util.defaults_from_env(util.log_traceback)
    with stdoutlog(), log_traceback(), warnings.via(treelog.warning), util.timeit():
        with treelog.context('arguments'):
            for name, value in kwargs.items():
                treelog.info(f'{name}={stringly.dumps(types[name], value)}')
        return f(**kwargs)


# vim:sw=4:sts=4:et
