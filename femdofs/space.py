"""
The space module defines the :class:`FESpace`, which combines a topology and
an element into a global numbering of degrees of freedom.

Every entity of dimension ``i`` owns ``element.dof_tuple[i]`` consecutive
global dofs. Dofs are handed out dimension by dimension, vertices first, and
within a dimension in the enumeration order of the topology, so that the ids
owned by dimension ``i`` form the contiguous range ``base[i] .. base[i+1]``.
A dof map of dimension ``d`` then lists per dimension ``d`` entity the dofs
of its sub-entities, copied from their owners. Entities that share a
sub-entity therefore share its dofs, which makes the resulting space
conforming.
"""

from . import _util as util, debug_flags, types
from functools import cached_property
import numpy
import treelog as log


class FESpace:
    '''Finite element space.

    Parameters
    ----------
    topology : :class:`femdofs.topology.Topology`
        The mesh topology. Any object offering ``shape``, ``ndims``,
        ``count(dim)`` and ``connectivity(d, dd)`` will do.
    element : :class:`femdofs.element.Element`
        The element, defined on the shape of the topology.
    '''

    def __init__(self, topology, element):
        if element.shape != topology.shape:
            raise ValueError(f'element {element!r} does not match the {topology.shape.value} shape of the topology')
        if len(element.dof_tuple) != topology.ndims + 1:
            raise ValueError(f'dof tuple {element.dof_tuple} does not match the topology dimension {topology.ndims}')
        self.topology = topology
        self.element = element
        self._dofmaps = {}

    def __repr__(self):
        return f'{type(self).__qualname__}<{self.element!r}:{self.ndofs}>'

    def _checkdim(self, d):
        if not 0 <= d <= self.topology.ndims:
            raise ValueError(f'dimension {d} out of range for a topology of dimension {self.topology.ndims}')

    @cached_property
    def _offsets(self):
        nentities = [self.topology.count(i) for i in range(self.topology.ndims+1)]
        blocksizes = [n * ndofs for n, ndofs in zip(nentities, self.element.dof_tuple)]
        return tuple(util.cumsum(blocksizes + [0]))

    @property
    def ndofs(self):
        'Total number of degrees of freedom.'

        return self._offsets[-1]

    def entity_dofs(self, dim):
        '''Global dofs owned by the entities of dimension ``dim``.

        Returns a ``dof_tuple[dim] x count(dim)`` table whose column ``e`` is
        the contiguous range of dofs owned by entity ``e``.'''

        self._checkdim(dim)
        ndofs = self.element.dof_tuple[dim]
        start, stop = self._offsets[dim:dim+2]
        return types.frozenarray(numpy.arange(start, stop).reshape(-1, ndofs).T if ndofs else numpy.zeros((0, self.topology.count(dim)), dtype=int), copy=False)

    def dofmap(self, d):
        '''Local to global dof map of the entities of dimension ``d``.

        Returns an integer table of ``sum(element.ndofs_per_dim(d))`` rows and
        ``count(d)`` columns, where entry ``[i, e]`` is the global dof of local
        dof ``i`` of entity ``e``. Local dofs are ordered by sub-entity
        dimension first and by the canonical local order of the sub-entities
        second; the dofs owned by the entity itself come last.'''

        self._checkdim(d)
        try:
            return self._dofmaps[d]
        except KeyError:
            pass
        subshape = self.element.shape.subshape(d)
        nentities = self.topology.count(d)
        blocks = []
        for dd in range(d):
            conn = self.topology.connectivity(d, dd)
            nsub = subshape.nsubentities(dd)
            if len(conn) != nentities or not conn.uniform or nentities and conn.degrees[0] != nsub:
                raise ValueError(f'connectivity {d} -> {dd} does not list {nsub} sub-entities for each of the {nentities} entities')
            subentities = conn.indices.reshape(nentities, nsub)
            owned = self.entity_dofs(dd)[:, subentities] # ndofs x nentities x nsub
            blocks.append(owned.transpose(2, 0, 1).reshape(nsub * len(owned), nentities))
        blocks.append(self.entity_dofs(d))
        dofmap = types.frozenarray(numpy.concatenate(blocks, axis=0), copy=False)
        log.debug(f'dofmap {d}: {dofmap.shape[0]} local dofs for {nentities} entities')
        if debug_flags.numbering and d == self.topology.ndims:
            self._check_numbering(dofmap)
        self._dofmaps[d] = dofmap
        return dofmap

    def _check_numbering(self, dofmap):
        # every dof owned by an entity incident to at least one cell occurs
        ndims = self.topology.ndims
        owned = [self.entity_dofs(dim)[:, numpy.greater(self.topology.connectivity(dim, ndims).degrees, 0)].ravel() for dim in range(ndims)]
        owned.append(self.entity_dofs(ndims).ravel())
        assert numpy.array_equal(numpy.unique(dofmap), numpy.unique(numpy.concatenate(owned))), 'incomplete dof numbering'

    def dof_indices(self, d):
        'Sorted unique global dofs occurring in the dof map of dimension ``d``.'

        return types.frozenarray(numpy.unique(self.dofmap(d)), copy=False)

    def dof_mask(self, d):
        '''Boolean array of length :attr:`ndofs` that is true exactly at the
        dofs occurring in the dof map of dimension ``d``.'''

        mask = numpy.zeros(self.ndofs, dtype=bool)
        mask[self.dof_indices(d)] = True
        return mask


# vim:sw=4:sts=4:et
