'''
Extensions of the :mod:`unittest` module for testing femdofs.
'''

from . import warnings
import logging
import numpy
import sys
import treelog
import unittest
import warnings as _builtin_warnings


def parametrize(cls):
    '''Parametrize a :class:`unittest.TestCase`.

    The decorated name becomes a function that adds a copy of the test case to
    the module, with the given parameters set as attributes before ``setUp``:

    >>> @parametrize
    ... class check(TestCase):
    ...     def test_ndofs(self):
    ...         self.assertEqual(self.space.ndofs, self.ndofs)
    >>> check('line:P1', space=..., ndofs=5)
    '''

    def case(name, /, **params):
        def setUp(self):
            self.__dict__.update(params)
            cls.setUp(self)
        qualname = f'{cls.__qualname__}:{name}'
        module = sys.modules[cls.__module__]
        assert not hasattr(module, qualname), f'duplicate test case {qualname}'
        testcase = type(name, (cls,), dict(setUp=setUp, __qualname__=qualname, __module__=cls.__module__, __doc__=cls.__doc__))
        setattr(module, qualname, testcase)
        return testcase

    return case


class TestCase(unittest.TestCase):
    '''Test case with femdofs defaults.

    Treelog messages are routed through the ``femdofs`` logger of the
    :mod:`logging` module to stdout, and every
    :class:`femdofs.warnings.FemdofsWarning` is raised as an exception unless
    expected with ``assertWarns``.
    '''

    maxDiff = None

    def enter_context(self, ctx):
        retval = ctx.__enter__()
        self.addCleanup(ctx.__exit__, None, None, None)
        return retval

    def setUp(self):
        super().setUp()
        logger = logging.getLogger('femdofs')
        logger.setLevel(logging.INFO)
        handler = logging.StreamHandler(sys.stdout)
        logger.addHandler(handler)
        self.addCleanup(logger.removeHandler, handler)
        self.enter_context(treelog.set(treelog.LoggingLog('femdofs')))
        self.enter_context(_builtin_warnings.catch_warnings())
        _builtin_warnings.simplefilter('error', warnings.FemdofsWarning)

    def assertAllEqual(self, actual, desired):
        'Assert that two arrays have equal shape and entries.'

        actual = numpy.asarray(actual)
        desired = numpy.asarray(desired)
        self.assertEqual(actual.shape, desired.shape)
        self.assertEqual(actual.tolist(), desired.tolist())

    def assertRows(self, rows, desired):
        '''Assert that the rows of a connectivity, or of a tuple of rows, equal
        ``desired`` row by row; rows may differ in length.'''

        self.assertEqual([list(map(int, row)) for row in rows], [list(row) for row in desired])

    def assertTransposed(self, conn, inverse):
        '''Assert that ``inverse`` holds the same incidences as ``conn`` with
        rows and columns swapped.'''

        self.assertEqual(conn.dims[::-1], inverse.dims)
        rows, cols = conn.coordinates()
        inverse_rows, inverse_cols = inverse.coordinates()
        self.assertEqual(sorted(zip(rows.tolist(), cols.tolist())), sorted(zip(inverse_cols.tolist(), inverse_rows.tolist())))


# vim:sw=4:sts=4:et
