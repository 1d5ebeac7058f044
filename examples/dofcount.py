from femdofs import mesh, element, testing
from femdofs.space import FESpace
import treelog

# This script counts the degrees of freedom of a continuous Lagrange space on
# a generated mesh, and reports how they are distributed over the vertices,
# edges, faces and cells.


def main(nelems: int = 4,
         etype: str = 'triangle',
         degree: int = 2):

    '''Degrees of freedom of a Lagrange space

    Numbers the degrees of freedom of a continuous Lagrange space on a unit
    square or unit cube mesh and logs the size of the numbering per entity
    dimension.

    Parameters
    ----------
    nelems
        Number of elements along edge.
    etype
        Type of elements (square/triangle/hexahedron/tetrahedron).
    degree
        Polynomial degree.
    '''

    if etype in ('square', 'triangle'):
        topo, coords = mesh.unitsquare(nelems, etype)
    else:
        topo, coords = mesh.unitcube(nelems, etype)

    elem = element.lagrange(topo.shape, degree)
    space = FESpace(topo, elem)

    with treelog.context('entities'):
        for dim, ndofs in enumerate(elem.dof_tuple):
            treelog.info(f'dimension {dim}: {topo.count(dim)} entities with {ndofs} dofs each')

    # The cell dof map has one column per cell and one row per local dof.
    dofmap = space.dofmap(topo.ndims)
    treelog.user(f'{space.ndofs} dofs, {dofmap.shape[0]} per cell')

    return space.ndofs, dofmap


class test(testing.TestCase):

    def test_triangle(self):
        ndofs, dofmap = main(nelems=2, etype='triangle', degree=2)
        self.assertEqual(ndofs, 25)
        self.assertEqual(dofmap.shape, (6, 8))

    def test_square(self):
        ndofs, dofmap = main(nelems=2, etype='square', degree=2)
        self.assertEqual(ndofs, 25)
        self.assertEqual(dofmap.shape, (9, 4))

    def test_tetrahedron(self):
        ndofs, dofmap = main(nelems=1, etype='tetrahedron', degree=2)
        self.assertEqual(ndofs, 27)
        self.assertEqual(dofmap.shape, (10, 6))


if __name__ == '__main__':
    from femdofs import cli
    cli.run(main)


# example:tags=dof numbering
