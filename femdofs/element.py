"""
The element module defines the reference shapes a mesh is built from and the
finite elements that live on them. A :class:`Shape` fixes the local numbering
of vertices and the canonical local order of sub-entities of every dimension;
an :class:`Element` fixes how many degrees of freedom every sub-entity owns.

Vertex numbering conventions
----------------------------

Simplex shapes number their ``ndims+1`` vertices consecutively; sub-entities
are ordered lexicographically by their local vertex tuples. For a triangle::

    2
    |\\         edges: (0,1) (0,2) (1,2)
    0-1

Tensor shapes number their ``2**ndims`` vertices in binary, with the first
axis most significant. Sub-entities are grouped by their free axes (in
combination order) and ordered by the values of the fixed axes. Every
sub-entity lists its vertices in its own tensor order, so that it is itself a
valid tensor shape. For a quadrilateral::

    1-3        edges: (0,2) (1,3) (0,1) (2,3)
    | |
    0-2
"""

from dataclasses import dataclass
from typing import Tuple
from numbers import Integral
import enum
import itertools
import math
import numpy


class Shape(enum.Enum):
    'Reference shape.'

    point = 'point'
    line = 'line'
    triangle = 'triangle'
    quadrilateral = 'quadrilateral'
    tetrahedron = 'tetrahedron'
    hexahedron = 'hexahedron'

    @property
    def ndims(self) -> int:
        return _ndims[self]

    @property
    def simplex(self) -> bool:
        return self in _simplices

    @property
    def nverts(self) -> int:
        return self.ndims + 1 if self.simplex else 2**self.ndims

    def subshape(self, dim: int) -> 'Shape':
        'Shape of the sub-entities of dimension ``dim``.'

        self._checkdim(dim)
        return (_simplices if self.simplex else _tensors)[dim]

    def subentities(self, dim: int) -> Tuple[Tuple[int, ...], ...]:
        '''Local vertex tuples of the sub-entities of dimension ``dim`` in
        canonical order.'''

        self._checkdim(dim)
        return _subentities[self][dim]

    def nsubentities(self, dim: int) -> int:
        return len(self.subentities(dim))

    def _checkdim(self, dim):
        if not 0 <= dim <= self.ndims:
            raise ValueError(f'dimension {dim} out of range for {self.value} of dimension {self.ndims}')

    @classmethod
    def simplex_of(cls, ndims: int) -> 'Shape':
        if not 0 <= ndims <= 3:
            raise ValueError(f'no simplex shape of dimension {ndims}')
        return _simplices[ndims]

    @classmethod
    def tensor_of(cls, ndims: int) -> 'Shape':
        if not 0 <= ndims <= 3:
            raise ValueError(f'no tensor shape of dimension {ndims}')
        return _tensors[ndims]


_simplices = Shape.point, Shape.line, Shape.triangle, Shape.tetrahedron
_tensors = Shape.point, Shape.line, Shape.quadrilateral, Shape.hexahedron
_ndims = {shape: ndims for shapes in (_simplices, _tensors) for ndims, shape in enumerate(shapes)}


def _simplex_subentities(ndims):
    return tuple(tuple(itertools.combinations(range(ndims+1), dim+1)) for dim in range(ndims+1))


def _tensor_subentities(ndims):
    weights = 2**numpy.arange(ndims)[::-1]
    subentities = []
    for dim in range(ndims+1):
        entities = []
        for free in itertools.combinations(range(ndims), dim):
            fixed = [axis for axis in range(ndims) if axis not in free]
            for values in itertools.product((0, 1), repeat=ndims-dim):
                coords = numpy.empty((2**dim, ndims), dtype=int)
                coords[:, list(free)] = list(numpy.ndindex(*[2]*dim)) if dim else numpy.empty((1, 0), dtype=int)
                coords[:, fixed] = values
                entities.append(tuple(int(i) for i in coords @ weights))
        subentities.append(tuple(entities))
    return tuple(subentities)


_subentities = {
    **{shape: _simplex_subentities(shape.ndims) for shape in _simplices},
    **{shape: _tensor_subentities(shape.ndims) for shape in _tensors[1:]},
}


@dataclass(frozen=True)
class Element:
    '''Finite element: a reference shape plus a local dof template.

    Parameters
    ----------
    shape : :class:`Shape`
        The reference shape.
    dof_tuple : :class:`tuple` of :class:`int`
        Number of local degrees of freedom owned by one sub-entity of every
        dimension ``0 .. shape.ndims``.
    name : :class:`str`
        Label used in the representation.
    '''

    shape: Shape
    dof_tuple: Tuple[int, ...]
    name: str = 'element'

    def __post_init__(self):
        if not isinstance(self.shape, Shape):
            raise ValueError(f'invalid shape {self.shape!r}')
        dof_tuple = tuple(self.dof_tuple)
        if len(dof_tuple) != self.shape.ndims + 1:
            raise ValueError(f'dof tuple of a {self.shape.value} should have length {self.shape.ndims+1}, got {len(dof_tuple)}')
        if not all(isinstance(n, Integral) and not isinstance(n, bool) and n >= 0 for n in dof_tuple):
            raise ValueError(f'dof tuple should contain non-negative integers, got {dof_tuple}')
        object.__setattr__(self, 'dof_tuple', tuple(map(int, dof_tuple)))

    def __repr__(self):
        return f'{self.name}({self.shape.value})'

    @property
    def ndims(self):
        return self.shape.ndims

    def ndofs_per_dim(self, d=None):
        '''Number of local dofs of a dimension ``d`` entity per sub-entity
        dimension ``0 .. d``; defaults to the full element.'''

        if d is None:
            d = self.ndims
        subshape = self.shape.subshape(d)
        return tuple(self.dof_tuple[i] * subshape.nsubentities(i) for i in range(d+1))

    @property
    def ndofs(self):
        'Number of local dofs per cell.'

        return sum(self.ndofs_per_dim())


def lagrange(shape, degree):
    '''Continuous Lagrange element: ``P_degree`` on simplices, ``Q_degree`` on
    tensor shapes.'''

    if not isinstance(degree, Integral) or isinstance(degree, bool) or degree < 1:
        raise ValueError(f'lagrange element requires a positive integer degree, got {degree!r}')
    degree = int(degree)
    if shape.simplex:
        dof_tuple = tuple(math.comb(degree-1, dim) for dim in range(shape.ndims+1))
        name = f'P{degree}'
    else:
        dof_tuple = tuple((degree-1)**dim for dim in range(shape.ndims+1))
        name = f'Q{degree}'
    return Element(shape, dof_tuple, name)


def discont(shape, degree=0):
    'Discontinuous element: all dofs owned by the cell.'

    if not isinstance(degree, Integral) or isinstance(degree, bool) or degree < 0:
        raise ValueError(f'discontinuous element requires a non-negative integer degree, got {degree!r}')
    degree = int(degree)
    ndofs = math.comb(degree+shape.ndims, shape.ndims) if shape.simplex else (degree+1)**shape.ndims
    return Element(shape, (0,) * shape.ndims + (ndofs,), f'DG{degree}')


def refelem(topology):
    'Lowest order continuous element on the shape of ``topology``.'

    return lagrange(topology.shape, 1)


# vim:sw=4:sts=4:et
