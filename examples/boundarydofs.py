from femdofs import mesh, element, testing
from femdofs.space import FESpace
import treelog
import numpy

# This script selects the degrees of freedom that lie on the boundary of a
# unit square, as needed to impose Dirichlet constraints.


def main(nelems: int = 4,
         etype: str = 'square',
         degree: int = 2):

    '''Boundary degrees of freedom

    Marks the degrees of freedom owned by the boundary edges and vertices of a
    unit square mesh.

    Parameters
    ----------
    nelems
        Number of elements along edge.
    etype
        Type of elements (square/triangle).
    degree
        Polynomial degree.
    '''

    topo, coords = mesh.unitsquare(nelems, etype)
    space = FESpace(topo, element.lagrange(topo.shape, degree))

    # Every boundary entity contributes the dofs it owns; a dof owned by an
    # edge in the interior is never selected, even if its vertices are.
    constrained = numpy.zeros(space.ndofs, dtype=bool)
    for dim in range(topo.ndims):
        constrained[space.entity_dofs(dim)[:, topo.boundary(dim)].ravel()] = True

    treelog.user(f'{constrained.sum()} of {space.ndofs} dofs on the boundary')
    return constrained


class test(testing.TestCase):

    def test_square(self):
        constrained = main(nelems=2, etype='square', degree=2)
        self.assertEqual(constrained.sum(), 16)
        self.assertEqual(len(constrained), 25)

    def test_triangle(self):
        constrained = main(nelems=3, etype='triangle', degree=1)
        self.assertEqual(constrained.sum(), 12)
        self.assertEqual(len(constrained), 16)


if __name__ == '__main__':
    from femdofs import cli
    cli.run(main)


# example:tags=boundary
