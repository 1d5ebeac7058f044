"""
Module with general purpose types.
"""

import numpy


def frozenarray(arg, *, copy=True, dtype=None):
    '''
    Create read-only Numpy array.

    Args
    ----
    arg : :class:`numpy.ndarray` or array_like
        Input data.
    copy : :class:`bool`
        If True (the default), do not modify the argument in place. No copy is
        ever forced if the argument is already immutable.
    dtype : :class:`numpy.dtype` or dtype_like, optional
        The desired data-type for the array.

    Returns
    -------
    :class:`numpy.ndarray`
    '''

    if isinstance(arg, numpy.generic):
        return arg
    if isinstance(arg, numpy.ndarray) and dtype in (None, arg.dtype):
        for base in _array_bases(arg):
            if base.flags.writeable:
                if copy:
                    break
                base.flags.writeable = False
        else:
            return arg
    array = numpy.array(arg, dtype=dtype)
    if not array.ndim:
        return array[()]  # convert to generic
    array.flags.writeable = False
    return array


def isfrozen(arg):
    'test whether no array in the base chain of ``arg`` is writeable'

    return isinstance(arg, numpy.ndarray) and not any(base.flags.writeable for base in _array_bases(arg))


def _array_bases(obj):
    'all ndarray bases starting from and including `obj`'
    while isinstance(obj, numpy.ndarray):
        yield obj
        obj = obj.base


# vim:sw=4:sts=4:et
