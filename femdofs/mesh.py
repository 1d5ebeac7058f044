"""
The mesh module provides mesh generators: methods that return a topology and
the coordinates of its vertices. Coordinates are returned as an ``nverts x
ndims`` array indexed by vertex id; they play no role in the dof numbering but
allow generated meshes to be inspected or exported by other tools.
"""

from . import types, warnings
from .element import Shape
from .topology import Topology
from numbers import Integral
from typing import Sequence, Tuple
import itertools
import numpy
import treelog as log


@log.withcontext
def rectilinear(shape: Sequence[int]) -> Tuple[Topology, numpy.ndarray]:
    '''Structured mesh of lines, quadrilaterals or hexahedra.

    Args
    ----
    shape : sequence of :class:`int`
        Number of elements along every axis.

    Returns
    -------
    :class:`femdofs.topology.Topology`:
        The topology; cells and vertices are numbered in row-major order.
    :class:`numpy.ndarray`:
        Vertex coordinates on the integer lattice.
    '''

    shape = tuple(shape)
    if not 1 <= len(shape) <= 3:
        raise ValueError(f'rectilinear mesh requires 1, 2 or 3 axes, got {len(shape)}')
    if not all(isinstance(n, Integral) and not isinstance(n, bool) and n >= 1 for n in shape):
        raise ValueError(f'number of elements should be positive integers, got {shape}')
    shape = tuple(map(int, shape))
    ndims = len(shape)
    vertex = numpy.arange(numpy.prod([n+1 for n in shape])).reshape([n+1 for n in shape])
    cells = numpy.stack([vertex[tuple(slice(c, c+n) for c, n in zip(corner, shape))].ravel() for corner in numpy.ndindex(*[2]*ndims)], axis=1)
    coords = numpy.stack([c.ravel() for c in numpy.meshgrid(*[numpy.arange(n+1) for n in shape], indexing='ij')], axis=1).astype(float)
    topo = Topology(Shape.tensor_of(ndims), cells, len(coords))
    log.info(f'generated {topo.shape.value} mesh with {len(topo)} cells and {topo.nverts} vertices')
    return topo, types.frozenarray(coords, copy=False)


def line(nelems: int) -> Tuple[Topology, numpy.ndarray]:
    'Line mesh of ``nelems`` segments on the unit interval.'

    topo, coords = rectilinear([nelems])
    return topo, types.frozenarray(coords / nelems, copy=False)


@log.withcontext
def simplex(cells, coords) -> Tuple[Topology, numpy.ndarray]:
    '''Simplex mesh.

    Args
    ----
    cells : :class:`numpy.ndarray`
        Vertex ids as (ncells x ndims+1) integer array. The table width
        determines the simplex shape.
    coords : :class:`numpy.ndarray`
        Coordinates as (nverts x ndims) float array to be indexed by ``cells``.

    Returns
    -------
    :class:`femdofs.topology.Topology`:
        The topology.
    :class:`numpy.ndarray`:
        The coordinates.
    '''

    cells = numpy.asarray(cells)
    coords = numpy.asarray(coords, dtype=float)
    if cells.ndim != 2 or not 2 <= cells.shape[1] <= 4:
        raise ValueError(f'simplex cells should have 2, 3 or 4 vertices, got shape {cells.shape}')
    if coords.ndim != 2:
        raise ValueError(f'coordinates should be a two-dimensional array, got shape {coords.shape}')
    topo = Topology(Shape.simplex_of(cells.shape[1]-1), cells, len(coords))
    log.info(f'generated {topo.shape.value} mesh with {len(topo)} cells and {topo.nverts} vertices')
    return topo, types.frozenarray(coords, copy=False)


def unitsquare(nelems: int, etype: str) -> Tuple[Topology, numpy.ndarray]:
    '''Unit square mesh.

    Args
    ----
    nelems : :class:`int`
        Number of elements along boundary
    etype : :class:`str`
        Type of element used for meshing. Supported are:

        * ``"square"``: structured mesh of quadrilaterals.

        * ``"triangle"``: mesh of triangles, splitting every square along
          alternating diagonals.

    Returns
    -------
    :class:`femdofs.topology.Topology`:
        The topology.
    :class:`numpy.ndarray`:
        The vertex coordinates.
    '''

    if etype == 'rectilinear':
        warnings.deprecation('etype "rectilinear" is deprecated; use "square" instead')
        etype = 'square'

    if not isinstance(nelems, Integral) or isinstance(nelems, bool) or nelems < 1:
        raise ValueError(f'number of elements should be a positive integer, got {nelems!r}')
    nelems = int(nelems)

    if etype == 'square':
        topo, coords = rectilinear([nelems, nelems])
        return topo, types.frozenarray(coords / nelems, copy=False)

    elif etype == 'triangle':
        cells = numpy.concatenate([
            numpy.take([i*(nelems+1)+j, i*(nelems+1)+j+1, (i+1)*(nelems+1)+j, (i+1)*(nelems+1)+j+1], [[0, 1, 2], [1, 2, 3]] if i % 2 == j % 2 else [[0, 1, 3], [0, 2, 3]], axis=0)
            for i in range(nelems) for j in range(nelems)])
        v = numpy.arange(nelems+1, dtype=float) / nelems
        coords = numpy.stack(numpy.meshgrid(v, v, indexing='ij'), axis=-1).reshape(-1, 2)
        return simplex(cells, coords)

    else:
        raise ValueError('invalid element type {!r}'.format(etype))


def unitcube(nelems: int, etype: str) -> Tuple[Topology, numpy.ndarray]:
    '''Unit cube mesh.

    Args
    ----
    nelems : :class:`int`
        Number of elements along every edge.
    etype : :class:`str`
        Type of element used for meshing. Supported are:

        * ``"hexahedron"``: structured mesh of hexahedra.

        * ``"tetrahedron"``: mesh of tetrahedra, splitting every cube in six
          tetrahedra around its main diagonal.

    Returns
    -------
    :class:`femdofs.topology.Topology`:
        The topology.
    :class:`numpy.ndarray`:
        The vertex coordinates.
    '''

    if not isinstance(nelems, Integral) or isinstance(nelems, bool) or nelems < 1:
        raise ValueError(f'number of elements should be a positive integer, got {nelems!r}')
    nelems = int(nelems)

    topo, coords = rectilinear([nelems]*3)
    coords = coords / nelems

    if etype == 'hexahedron':
        return topo, types.frozenarray(coords, copy=False)

    elif etype == 'tetrahedron':
        # path from corner (0,0,0) to (1,1,1) along the axes in every order
        weights = numpy.array([4, 2, 1])
        paths = [numpy.cumsum([0, *weights[list(axes)]]) for axes in itertools.permutations(range(3))]
        cells = numpy.sort(topo.cells[:, paths].reshape(-1, 4), axis=1)
        return simplex(cells, coords)

    else:
        raise ValueError('invalid element type {!r}'.format(etype))


# vim:sw=4:sts=4:et
