"""
The connectivity module defines the :class:`MeshConnectivity`, the incidence
relation ``d -> dd`` between the mesh entities of two fixed topological
dimensions. The relation is stored in compressed row layout: a flat array of
column ids ``indices`` and an array ``offsets`` such that the dimension ``dd``
entities incident to the dimension ``d`` entity ``i`` are
``indices[offsets[i]:offsets[i+1]]``.

Stores are immutable. Row queries return read-only views of the internal
storage; callers that need to modify the result must take a copy.
"""

from . import types, warnings
from functools import cached_property
from numbers import Integral
import numpy


class IndexOutOfRange(IndexError):
    '''Index outside of its valid half-open range.

    Attributes
    ----------
    index : :class:`int`
        The offending index.
    range : :class:`tuple` of two :class:`int`
        The valid range ``(start, stop)``, ``stop`` excluded.
    '''

    def __init__(self, what, index, start, stop):
        self.index = index
        self.range = start, stop
        super().__init__(f'{what} {index} out of range [{start}, {stop})')


class ConnectivityError(ValueError):
    'Malformed compressed row layout.'


class MeshConnectivity:
    '''Incidence relation ``d -> dd`` in compressed row layout.

    Parameters
    ----------
    d : :class:`int`
        Dimension of the row entities.
    dd : :class:`int`
        Dimension of the column entities.
    indices : array_like of :class:`int`, optional
        Column ids, one per stored incidence.
    offsets : array_like of :class:`int`, optional
        Row start positions in ``indices``, of length number of rows plus one.

    Omitting both ``indices`` and ``offsets`` yields an empty relation.

    Attributes
    ----------
    dims : :class:`tuple` of two :class:`int`
        The row and column dimension.
    indices : :class:`numpy.ndarray`
        Read-only column ids.
    offsets : :class:`numpy.ndarray`
        Read-only row offsets.
    uniform : :class:`bool`
        True if all rows have the same degree.
    '''

    def __init__(self, d: Integral, dd: Integral, indices=None, offsets=None):
        if not isinstance(d, Integral) or not isinstance(dd, Integral) or d < 0 or dd < 0:
            raise ConnectivityError(f'invalid dimensions {d!r} -> {dd!r}')
        if offsets is None:
            if indices is not None and len(indices):
                raise ConnectivityError('indices given without offsets')
            offsets = 0,
        if indices is None:
            indices = ()
        self.dims = int(d), int(dd)
        self.indices = self._validated_array('indices', indices)
        self.offsets = self._validated_array('offsets', offsets)
        if len(self.offsets) == 0:
            self.offsets = types.frozenarray([0], dtype=int)
        if self.offsets[0] != 0:
            raise ConnectivityError(f'offsets should start at 0, got {self.offsets[0]}')
        if numpy.less(self.offsets[1:], self.offsets[:-1]).any():
            raise ConnectivityError('offsets should be non-decreasing')
        if self.offsets[-1] != len(self.indices):
            raise ConnectivityError(f'offsets should end at the number of indices ({len(self.indices)}), got {self.offsets[-1]}')
        if numpy.less(self.indices, 0).any():
            raise ConnectivityError('indices should be non-negative')
        degrees = self.degrees
        self.uniform = bool(len(degrees) == 0 or numpy.equal(degrees, degrees[0]).all())

    @staticmethod
    def _validated_array(name, data):
        array = numpy.asarray(data)
        if array.size == 0:
            array = array.astype(int).reshape(0)
        if array.ndim != 1:
            raise ConnectivityError(f'{name} should be one-dimensional, got shape {array.shape}')
        if array.dtype.kind not in 'iu':
            raise ConnectivityError(f'{name} should be of integer type, got {array.dtype}')
        return types.frozenarray(array, dtype=int)

    @classmethod
    def from_coordinates(cls, d, dd, rows, cols, nrows=None):
        '''Create a relation from incidence pairs.

        Pairs are grouped by row. Within a row the order of ``cols`` is
        preserved, so that ``MeshConnectivity.from_coordinates(d, dd,
        *conn.coordinates(), len(conn)) == conn``.'''

        rows = numpy.asarray(rows, dtype=int).reshape(-1)
        cols = numpy.asarray(cols, dtype=int).reshape(-1)
        if rows.shape != cols.shape:
            raise ConnectivityError(f'rows and cols differ in length: {len(rows)} != {len(cols)}')
        if numpy.less(rows, 0).any():
            raise ConnectivityError('rows should be non-negative')
        if nrows is None:
            nrows = rows.max() + 1 if len(rows) else 0
        elif len(rows) and rows.max() >= nrows:
            raise ConnectivityError(f'row {rows.max()} exceeds the number of rows {nrows}')
        order = numpy.argsort(rows, kind='stable')
        offsets = numpy.zeros(nrows+1, dtype=int)
        numpy.cumsum(numpy.bincount(rows, minlength=nrows), out=offsets[1:])
        return cls(d, dd, cols[order], offsets)

    def __repr__(self):
        return 'MeshConnectivity({} -> {})'.format(*self.dims)

    def __eq__(self, other):
        return self is other or type(self) is type(other) \
            and self.dims == other.dims \
            and numpy.array_equal(self.offsets, other.offsets) \
            and numpy.array_equal(self.indices, other.indices)

    __hash__ = None

    @cached_property
    def shape(self):
        '''Number of row and column entities.

        The number of columns is not stored but derived from the largest
        column id.'''

        n_d = len(self.offsets) - 1
        n_dd = int(self.indices.max()) + 1 if len(self.indices) else 0
        return n_d, n_dd

    def __len__(self):
        return len(self.offsets) - 1

    @property
    def nnz(self):
        'Number of stored incidences.'

        return int(self.offsets[-1])

    @cached_property
    def degrees(self):
        'Number of incidences per row.'

        return types.frozenarray(numpy.diff(self.offsets), copy=False)

    def degree(self, row):
        r = self.rowrange(row)
        return r.stop - r.start

    def _checkrow(self, row):
        if not isinstance(row, Integral):
            raise TypeError(f'row should be an integer, got {row!r}')
        if not 0 <= row < len(self):
            raise IndexOutOfRange('row', row, 0, len(self))
        return int(row)

    def rowrange(self, row):
        '''Range of positions in :attr:`indices` that hold the incidences of
        ``row``.'''

        row = self._checkrow(row)
        return range(self.offsets[row], self.offsets[row+1])

    def neighbors(self, row):
        'Read-only view of the column ids incident to ``row``.'

        r = self.rowrange(row)
        return self.indices[r.start:r.stop]

    def get(self, row, col):
        'Column id at local position ``col`` of ``row``.'

        r = self.rowrange(row)
        if not isinstance(col, Integral):
            raise TypeError(f'col should be an integer, got {col!r}')
        if not 0 <= col < len(r):
            raise IndexOutOfRange('column', col, 0, len(r))
        return int(self.indices[r.start+col])

    def gather(self, rows, cols=None):
        '''Gather the column ids of several rows.

        With ``cols`` the result is a dense ``len(rows) x len(cols)`` table of
        the column ids at local positions ``cols``, every position checked
        against the degree of its row. Without ``cols`` the result is a dense
        ``len(rows) x degree`` table for a :attr:`uniform` relation and a tuple
        of per row arrays otherwise.'''

        rows = self._asindexarray(rows)
        for row in rows:
            self._checkrow(row)
        if cols is not None:
            cols = self._asindexarray(cols)
            degrees = self.degrees[rows]
            invalid = numpy.less(cols, 0)[numpy.newaxis] | numpy.greater_equal(cols[numpy.newaxis], degrees[:, numpy.newaxis])
            if invalid.any():
                irow, icol = numpy.argwhere(invalid)[0]
                raise IndexOutOfRange('column', int(cols[icol]), 0, int(degrees[irow]))
            return types.frozenarray(self.indices[self.offsets[rows, numpy.newaxis] + cols], copy=False)
        if self.uniform:
            degree = self.degrees[0] if len(self) else 0
            return types.frozenarray(self.indices.reshape(len(self), degree)[rows], copy=False)
        return tuple(self.indices[self.offsets[row]:self.offsets[row+1]] for row in rows)

    @staticmethod
    def _asindexarray(items):
        array = numpy.asarray(items)
        if array.size == 0:
            return numpy.zeros(0, dtype=int)
        if array.ndim != 1 or array.dtype.kind not in 'iu':
            raise TypeError(f'expected a sequence of integers, got {items!r}')
        return array.astype(int, copy=False)

    def __getitem__(self, item):
        if isinstance(item, tuple):
            if len(item) != 2:
                raise IndexError(f'too many indices: {item!r}')
            row, col = item
            if isinstance(row, Integral) and isinstance(col, Integral):
                return self.get(row, col)
            if isinstance(row, Integral) and isinstance(col, slice):
                return self.neighbors(row)[col]
            if isinstance(row, slice):
                row = range(len(self))[row]
            if isinstance(col, slice):
                if col == slice(None):
                    return self.gather(row)
                if not self.uniform:
                    raise IndexError('partial column slices require a uniform relation')
                col = range(self.degrees[0] if len(self) else 0)[col]
            if isinstance(row, Integral):
                return self.gather([row], col)[0]
            if isinstance(col, Integral):
                return self.gather(row, [col])[:, 0]
            return self.gather(row, col)
        if isinstance(item, Integral):
            return self.neighbors(item)
        if isinstance(item, slice):
            return self.gather(range(len(self))[item])
        mask = numpy.asarray(item)
        if mask.dtype == bool:
            if mask.shape != (len(self),):
                warnings.warn(f'boolean mask length ({len(mask)}) does not match the number of rows ({len(self)})')
            item, = mask.nonzero()
        return self.gather(item)

    def __iter__(self):
        for start, stop in zip(self.offsets[:-1], self.offsets[1:]):
            yield self.indices[start:stop]

    def nonzeros(self):
        'Incidence values; the relation is structural, so all ones.'

        return numpy.ones(self.nnz, dtype=int)

    def coordinates(self):
        '''Row and column ids of all incidences.

        Pairs are ordered by row and, within a row, in stored order.'''

        rows = numpy.repeat(numpy.arange(len(self)), self.degrees)
        return types.frozenarray(rows, copy=False), self.indices

    def flatindices(self):
        'Incidences as linear indices ``row * ncols + col``.'

        rows, cols = self.coordinates()
        return rows * self.shape[1] + cols

    def transpose(self, nrows=None):
        '''The inverse relation ``dd -> d``.

        Rows of the result list their incident entities in ascending order. The
        number of rows defaults to the number of columns of ``self``; a larger
        ``nrows`` appends empty rows for column entities without incidences.'''

        if nrows is None:
            nrows = self.shape[1]
        rows, cols = self.coordinates()
        order = numpy.lexsort([rows, cols])
        return MeshConnectivity.from_coordinates(self.dims[1], self.dims[0], cols[order], rows[order], nrows)

    def toarray(self):
        'Dense boolean incidence matrix.'

        array = numpy.zeros(self.shape, dtype=bool)
        array[self.coordinates()] = True
        return array


# vim:sw=4:sts=4:et
