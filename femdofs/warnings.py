import warnings, contextlib


class FemdofsWarning(Warning):
    'Base class for warnings from femdofs.'


class FemdofsDeprecationWarning(FemdofsWarning):
    'Warning about deprecated femdofs features.'


def warn(message, category=FemdofsWarning, stacklevel=1):
    warnings.warn(message, category, stacklevel=stacklevel+1)


def deprecation(message):
    warnings.warn(message, FemdofsDeprecationWarning, stacklevel=2)


@contextlib.contextmanager
def via(print):
    '''context manager to set/reset warnings.showwarning'''

    oldshowwarning = warnings.showwarning
    warnings.showwarning = lambda message, category, filename, lineno, *args: print(f'{category.__name__}: {message}\n  In {filename}:{lineno}')
    try:
        yield
    finally:
        warnings.showwarning = oldshowwarning


# vim:sw=4:sts=4:et
