"""
The topology module defines the :class:`Topology`: a set of cells of a single
reference shape together with the entities of every lower dimension they
imply. Maintaining strict separation of topological and geometrical
information, the topology knows how cells, faces, edges and vertices are
interconnected, but not where they are positioned in space.

Entities of every dimension are numbered ``0 .. count(dim)-1``:

*   vertices keep the ids used in the cell table;
*   cells keep their row order in the cell table;
*   all other entities are numbered in order of first appearance, visiting
    cells in order and, per cell, the sub-entities in the canonical local order
    of the shape (see :mod:`femdofs.element`).

This enumeration order is fixed at construction and defines the order in
which :class:`femdofs.space.FESpace` hands out global degrees of freedom.
"""

from . import _util as util, types
from .connectivity import MeshConnectivity
from .element import Shape
from functools import cached_property
from typing import Optional
import numpy
import treelog as log


class Topology:
    '''Unstructured single-shape topology.

    Parameters
    ----------
    shape : :class:`femdofs.element.Shape`
        The shape of the cells.
    cells : :class:`numpy.ndarray`
        Integer array of shape ``ncells x shape.nverts`` listing per cell its
        vertices in the local vertex order of ``shape``.
    nverts : :class:`int`, optional
        Number of vertices; defaults to the largest vertex id plus one.
    '''

    def __init__(self, shape: Shape, cells, nverts: Optional[int] = None):
        assert isinstance(shape, Shape), f'shape={shape!r}'
        cells = numpy.asarray(cells)
        if cells.size == 0:
            cells = cells.astype(int).reshape(0, shape.nverts)
        if cells.ndim != 2 or cells.shape[1] != shape.nverts:
            raise ValueError(f'cells of a {shape.value} topology should have shape (ncells, {shape.nverts}), got {cells.shape}')
        if cells.dtype.kind not in 'iu':
            raise ValueError(f'cells should be of integer type, got {cells.dtype}')
        if numpy.less(cells, 0).any():
            raise ValueError('vertex ids should be non-negative')
        if nverts is None:
            nverts = int(cells.max()) + 1 if cells.size else 0
        elif cells.size and cells.max() >= nverts:
            raise ValueError(f'vertex id {cells.max()} exceeds the number of vertices {nverts}')
        sortedcells = numpy.sort(cells, axis=1)
        if numpy.equal(sortedcells[:, 1:], sortedcells[:, :-1]).any():
            raise ValueError('cells should not repeat vertices')
        self.shape = shape
        self.ndims = shape.ndims
        self.cells = types.frozenarray(cells, dtype=int)
        self.nverts = nverts
        self._connectivity = {}

    def __repr__(self):
        return '{}<{}:{}>'.format(type(self).__qualname__, self.shape.value, ','.join(str(self.count(dim)) for dim in range(self.ndims+1)))

    def __len__(self):
        return len(self.cells)

    def _checkdim(self, dim):
        if not 0 <= dim <= self.ndims:
            raise ValueError(f'dimension {dim} out of range for a topology of dimension {self.ndims}')

    @cached_property
    def _enumeration(self):
        # per dimension the vertex table of the entities and the cell to
        # entity incidence table
        entities = [types.frozenarray(numpy.arange(self.nverts)[:, numpy.newaxis], copy=False)]
        incidences = [self.cells]
        for dim in range(1, self.ndims):
            local = numpy.array(self.shape.subentities(dim))  # nsub x nverts(dim)
            candidates = self.cells[:, local].reshape(-1, local.shape[1])
            unique, indices = util.unique(map(tuple, candidates), key=lambda verts: tuple(sorted(verts)))
            entities.append(types.frozenarray(numpy.array(unique, dtype=int).reshape(-1, local.shape[1]), copy=False))
            incidences.append(types.frozenarray(numpy.array(indices, dtype=int).reshape(len(self.cells), len(local)), copy=False))
        if self.ndims:
            entities.append(self.cells)
        return tuple(entities), tuple(incidences)

    def count(self, dim: int) -> int:
        'Number of entities of dimension ``dim``.'

        self._checkdim(dim)
        return len(self._enumeration[0][dim])

    def entities(self, dim: int) -> numpy.ndarray:
        '''Vertex table of the entities of dimension ``dim``, each listing its
        vertices in its own local vertex order.'''

        self._checkdim(dim)
        return self._enumeration[0][dim]

    def connectivity(self, d: int, dd: int) -> MeshConnectivity:
        '''Incidence relation between entities of dimension ``d`` and ``dd``.

        * ``d > dd``: the sub-entities of every dimension ``d`` entity, in the
          canonical local order of its shape.
        * ``d < dd``: the inverse relation, in ascending order.
        * ``d == dd > 0``: entities sharing at least one vertex.
        * ``d == dd == 0``: vertices sharing an edge.

        Relations are built on first request and cached.'''

        self._checkdim(d)
        self._checkdim(dd)
        try:
            return self._connectivity[d, dd]
        except KeyError:
            pass
        log.debug(f'building connectivity {d} -> {dd}')
        if d > dd:
            table = self._subentity_table(d, dd)
            conn = MeshConnectivity(d, dd, table.ravel(), numpy.arange(len(table)+1) * table.shape[1])
        elif d < dd:
            conn = self.connectivity(dd, d).transpose(self.count(d))
        elif d == 0 and self.ndims == 0:
            conn = MeshConnectivity(0, 0, (), numpy.zeros(self.nverts+1, dtype=int))
        else:
            via = 1 if d == 0 else 0
            down = self.connectivity(d, via)
            up = self.connectivity(via, d)
            rows = []
            cols = []
            for ientity, verts in enumerate(down):
                neighbors = numpy.unique(numpy.concatenate([numpy.zeros(0, dtype=int), *(up.neighbors(v) for v in verts)]))
                neighbors = neighbors[neighbors != ientity]
                rows.append(numpy.full(len(neighbors), ientity))
                cols.append(neighbors)
            conn = MeshConnectivity.from_coordinates(d, d, numpy.concatenate(rows or [[]]), numpy.concatenate(cols or [[]]), self.count(d))
        self._connectivity[d, dd] = conn
        return conn

    def _subentity_table(self, d, dd):
        # dimension dd sub-entities per dimension d entity, as dense table
        entities, incidences = self._enumeration
        if d == self.ndims:
            return incidences[dd]
        if dd == 0:
            return entities[d]
        local = numpy.array(self.shape.subshape(d).subentities(dd))
        lookup = {tuple(sorted(verts)): i for i, verts in enumerate(entities[dd].tolist())}
        keys = numpy.sort(entities[d][:, local], axis=2).reshape(-1, local.shape[1])
        return numpy.array([lookup[tuple(key)] for key in keys.tolist()], dtype=int).reshape(len(entities[d]), len(local))

    def boundary(self, dim: Optional[int] = None) -> numpy.ndarray:
        '''Ids of the entities of dimension ``dim`` (default: facets) that lie
        on the boundary, in ascending order.

        A facet is on the boundary if it is incident to exactly one cell; a
        lower dimensional entity if it is incident to a boundary facet.'''

        if not self.ndims:
            raise ValueError('a topology of dimension 0 has no boundary')
        if dim is None:
            dim = self.ndims - 1
        self._checkdim(dim)
        if dim == self.ndims:
            raise ValueError('cells cannot lie on the boundary')
        facets, = numpy.equal(self.connectivity(self.ndims-1, self.ndims).degrees, 1).nonzero()
        if dim == self.ndims - 1:
            return types.frozenarray(facets, copy=False)
        return types.frozenarray(numpy.unique(self.connectivity(self.ndims-1, dim).gather(facets).ravel()), copy=False)


# vim:sw=4:sts=4:et
