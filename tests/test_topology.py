from femdofs import mesh
from femdofs.element import Shape
from femdofs.topology import Topology
from femdofs.testing import TestCase, parametrize
import numpy


class twotriangles(TestCase):

    def setUp(self):
        super().setUp()
        self.topo = Topology(Shape.triangle, [[0, 1, 2], [1, 2, 3]])

    def test_count(self):
        self.assertEqual([self.topo.count(dim) for dim in range(3)], [4, 5, 2])
        self.assertEqual(len(self.topo), 2)

    def test_edges(self):
        self.assertAllEqual(self.topo.entities(1), [[0, 1], [0, 2], [1, 2], [1, 3], [2, 3]])

    def test_vertices(self):
        self.assertAllEqual(self.topo.entities(0), [[0], [1], [2], [3]])

    def test_cell_vertices(self):
        self.assertAllEqual(self.topo.connectivity(2, 0)[:], [[0, 1, 2], [1, 2, 3]])

    def test_cell_edges(self):
        conn = self.topo.connectivity(2, 1)
        self.assertTrue(conn.uniform)
        self.assertAllEqual(conn[:], [[0, 1, 2], [2, 3, 4]])

    def test_edge_vertices(self):
        self.assertAllEqual(self.topo.connectivity(1, 0)[:], [[0, 1], [0, 2], [1, 2], [1, 3], [2, 3]])

    def test_edge_cells(self):
        conn = self.topo.connectivity(1, 2)
        self.assertFalse(conn.uniform)
        self.assertRows(conn, [[0], [0], [0, 1], [1], [1]])

    def test_vertex_cells(self):
        self.assertRows(self.topo.connectivity(0, 2), [[0], [0, 1], [0, 1], [1]])

    def test_cell_cells(self):
        self.assertRows(self.topo.connectivity(2, 2), [[1], [0]])

    def test_vertex_vertices(self):
        self.assertRows(self.topo.connectivity(0, 0), [[1, 2], [0, 2, 3], [0, 1, 3], [1, 2]])

    def test_edge_edges(self):
        self.assertRows(self.topo.connectivity(1, 1), [[1, 2, 3], [0, 2, 4], [0, 1, 3, 4], [0, 2, 4], [1, 2, 3]])

    def test_cached(self):
        self.assertIs(self.topo.connectivity(1, 2), self.topo.connectivity(1, 2))

    def test_boundary(self):
        self.assertAllEqual(self.topo.boundary(), [0, 1, 3, 4])
        self.assertAllEqual(self.topo.boundary(0), [0, 1, 2, 3])

    def test_boundary_cells(self):
        with self.assertRaises(ValueError):
            self.topo.boundary(2)

    def test_invalid_dim(self):
        with self.assertRaises(ValueError):
            self.topo.count(3)
        with self.assertRaises(ValueError):
            self.topo.connectivity(0, -1)

    def test_repr(self):
        self.assertEqual(repr(self.topo), 'Topology<triangle:4,5,2>')


class isolated(TestCase):

    def setUp(self):
        super().setUp()
        self.topo = Topology(Shape.line, [[0, 1], [1, 3]], nverts=5)

    def test_count(self):
        self.assertEqual(self.topo.count(0), 5)

    def test_vertex_cells(self):
        self.assertRows(self.topo.connectivity(0, 1), [[0], [0, 1], [], [1], []])

    def test_vertex_vertices(self):
        self.assertRows(self.topo.connectivity(0, 0), [[1], [0, 3], [], [1], []])

    def test_boundary(self):
        self.assertAllEqual(self.topo.boundary(), [0, 3])


class quadrilaterals(TestCase):

    def setUp(self):
        super().setUp()
        self.topo, self.coords = mesh.rectilinear([2, 1])

    def test_count(self):
        self.assertEqual([self.topo.count(dim) for dim in range(3)], [6, 7, 2])

    def test_edges(self):
        # cell 0 has vertices 0, 1, 2, 3; cell 1 has vertices 2, 3, 4, 5
        self.assertAllEqual(self.topo.entities(1), [[0, 2], [1, 3], [0, 1], [2, 3], [2, 4], [3, 5], [4, 5]])
        self.assertAllEqual(self.topo.connectivity(2, 1)[:], [[0, 1, 2, 3], [4, 5, 3, 6]])

    def test_boundary(self):
        self.assertAllEqual(self.topo.boundary(), [0, 1, 2, 4, 5, 6])


class point(TestCase):

    def test_connectivity(self):
        topo = Topology(Shape.point, [[0], [1]])
        self.assertEqual(topo.ndims, 0)
        self.assertEqual(topo.count(0), 2)
        self.assertEqual(topo.connectivity(0, 0).shape, (2, 0))
        with self.assertRaises(ValueError):
            topo.boundary()


class validation(TestCase):

    def test_width(self):
        with self.assertRaises(ValueError):
            Topology(Shape.triangle, [[0, 1]])

    def test_negative(self):
        with self.assertRaises(ValueError):
            Topology(Shape.line, [[0, -1]])

    def test_nverts(self):
        with self.assertRaises(ValueError):
            Topology(Shape.line, [[0, 2]], nverts=2)

    def test_repeated(self):
        with self.assertRaises(ValueError):
            Topology(Shape.triangle, [[0, 1, 1]])

    def test_float(self):
        with self.assertRaises(ValueError):
            Topology(Shape.line, [[0., 1.]])

    def test_empty(self):
        topo = Topology(Shape.triangle, [])
        self.assertEqual([topo.count(dim) for dim in range(3)], [0, 0, 0])
        self.assertEqual(topo.connectivity(2, 1).shape, (0, 0))


@parametrize
class generated(TestCase):

    def setUp(self):
        super().setUp()
        self.topo, self.coords = self.generate()

    def test_euler(self):
        self.assertEqual(sum((-1)**dim * self.topo.count(dim) for dim in range(self.topo.ndims+1)), 1)

    def test_facets(self):
        # every facet of a manifold with boundary has one or two cells
        if self.topo.ndims:
            degrees = self.topo.connectivity(self.topo.ndims-1, self.topo.ndims).degrees
            self.assertTrue(numpy.isin(degrees, [1, 2]).all())

    def test_transpose(self):
        for d in range(self.topo.ndims+1):
            for dd in range(d):
                self.assertTransposed(self.topo.connectivity(d, dd), self.topo.connectivity(dd, d))

    def test_subentity_vertices(self):
        for d in range(1, self.topo.ndims+1):
            for dd in range(1, d):
                vertices = self.topo.connectivity(d, 0)
                subentities = self.topo.connectivity(d, dd)
                subvertices = self.topo.connectivity(dd, 0)
                for ientity in range(self.topo.count(d)):
                    for isub in subentities.neighbors(ientity):
                        self.assertTrue(set(subvertices.neighbors(isub)) <= set(vertices.neighbors(ientity)))

    def test_local_order(self):
        shape = self.topo.shape
        for d in range(1, self.topo.ndims):
            local = shape.subentities(d)
            for cell, subentities in zip(self.topo.cells, self.topo.connectivity(self.topo.ndims, d)):
                for verts, isub in zip(local, subentities):
                    self.assertEqual(sorted(self.topo.entities(d)[isub]), sorted(cell[list(verts)]))

    def test_neighbors_symmetric(self):
        for d in range(self.topo.ndims+1):
            array = self.topo.connectivity(d, d).toarray()
            self.assertAllEqual(array, array.T)
            self.assertFalse(array.diagonal().any())


generated('line', generate=lambda: mesh.line(4))
generated('square', generate=lambda: mesh.unitsquare(3, 'square'))
generated('triangle', generate=lambda: mesh.unitsquare(3, 'triangle'))
generated('hexahedron', generate=lambda: mesh.unitcube(2, 'hexahedron'))
generated('tetrahedron', generate=lambda: mesh.unitcube(2, 'tetrahedron'))
