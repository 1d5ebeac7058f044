from femdofs import mesh, warnings
from femdofs.element import Shape
from femdofs.testing import TestCase, parametrize
import numpy


class rectilinear(TestCase):

    def test_line(self):
        topo, coords = mesh.rectilinear([3])
        self.assertEqual(topo.shape, Shape.line)
        self.assertAllEqual(topo.cells, [[0, 1], [1, 2], [2, 3]])
        self.assertAllEqual(coords, [[0], [1], [2], [3]])

    def test_square(self):
        topo, coords = mesh.rectilinear([2, 3])
        self.assertEqual(topo.shape, Shape.quadrilateral)
        self.assertEqual(len(topo), 6)
        self.assertEqual(topo.nverts, 12)
        self.assertAllEqual(topo.cells[0], [0, 1, 4, 5])
        self.assertAllEqual(topo.cells[-1], [6, 7, 10, 11])
        self.assertAllEqual(coords[5], [1, 1])

    def test_cube(self):
        topo, coords = mesh.rectilinear([1, 1, 2])
        self.assertEqual(topo.shape, Shape.hexahedron)
        self.assertAllEqual(topo.cells, [[0, 1, 3, 4, 6, 7, 9, 10], [1, 2, 4, 5, 7, 8, 10, 11]])

    def test_corners(self):
        # local vertex ids follow the binary tensor order of the shape
        topo, coords = mesh.rectilinear([2, 2])
        for cell in topo.cells:
            local = coords[cell] - coords[cell[0]]
            self.assertAllEqual(local, [[0, 0], [0, 1], [1, 0], [1, 1]])

    def test_invalid(self):
        with self.assertRaises(ValueError):
            mesh.rectilinear([])
        with self.assertRaises(ValueError):
            mesh.rectilinear([1, 0])
        with self.assertRaises(ValueError):
            mesh.rectilinear([1, 1, 1, 1])
        with self.assertRaises(ValueError):
            mesh.rectilinear([2, True])


class line(TestCase):

    def test(self):
        topo, coords = mesh.line(4)
        self.assertEqual(len(topo), 4)
        self.assertAllEqual(coords.ravel(), [0, .25, .5, .75, 1])

    def test_numpy_integer(self):
        topo, coords = mesh.line(numpy.int64(4))
        self.assertEqual(len(topo), 4)
        self.assertAllEqual(coords.ravel(), [0, .25, .5, .75, 1])


class simplex(TestCase):

    def test_triangles(self):
        topo, coords = mesh.simplex([[0, 1, 2], [1, 2, 3]], [[0, 0], [1, 0], [0, 1], [1, 1]])
        self.assertEqual(topo.shape, Shape.triangle)
        self.assertEqual(topo.nverts, 4)
        self.assertEqual(coords.dtype, float)

    def test_unused_vertex(self):
        topo, coords = mesh.simplex([[0, 1]], [[0], [1], [2]])
        self.assertEqual(topo.count(0), 3)

    def test_invalid(self):
        with self.assertRaises(ValueError):
            mesh.simplex([[0, 1, 2, 3, 4]], numpy.zeros((5, 4)))
        with self.assertRaises(ValueError):
            mesh.simplex([[0, 1]], [0, 1])
        with self.assertRaises(ValueError):
            mesh.simplex([[0, 3]], [[0], [1]])


class unitsquare(TestCase):

    def test_square(self):
        topo, coords = mesh.unitsquare(2, 'square')
        self.assertEqual(len(topo), 4)
        self.assertEqual(topo.count(1), 12)
        self.assertAllEqual(coords.max(axis=0), [1, 1])

    def test_triangle(self):
        topo, coords = mesh.unitsquare(2, 'triangle')
        self.assertEqual(topo.shape, Shape.triangle)
        self.assertEqual([topo.count(dim) for dim in range(3)], [9, 16, 8])
        self.assertEqual(len(topo.boundary()), 8)

    def test_triangle_area(self):
        topo, coords = mesh.unitsquare(3, 'triangle')
        a, b, c = coords[topo.cells.T]
        u, v = b - a, c - a
        areas = abs(u[:, 0] * v[:, 1] - u[:, 1] * v[:, 0]) / 2
        self.assertAlmostEqual(areas.sum(), 1)
        self.assertTrue(numpy.allclose(areas, 1/18))

    def test_deprecated(self):
        with self.assertWarns(warnings.FemdofsDeprecationWarning):
            topo, coords = mesh.unitsquare(2, 'rectilinear')
        self.assertEqual(topo.shape, Shape.quadrilateral)

    def test_invalid(self):
        with self.assertRaises(ValueError):
            mesh.unitsquare(2, 'hexagon')
        with self.assertRaises(ValueError):
            mesh.unitsquare(0, 'square')
        with self.assertRaises(ValueError):
            mesh.unitsquare(True, 'square')

    def test_numpy_integer(self):
        topo, coords = mesh.unitsquare(numpy.int64(2), 'triangle')
        self.assertEqual(len(topo), 8)
        topo, coords = mesh.unitcube(numpy.int32(1), 'tetrahedron')
        self.assertEqual(len(topo), 6)


class unitcube(TestCase):

    def test_hexahedron(self):
        topo, coords = mesh.unitcube(2, 'hexahedron')
        self.assertEqual([topo.count(dim) for dim in range(4)], [27, 54, 36, 8])

    def test_tetrahedron(self):
        topo, coords = mesh.unitcube(2, 'tetrahedron')
        self.assertEqual(topo.shape, Shape.tetrahedron)
        self.assertEqual(len(topo), 48)
        self.assertEqual(topo.count(0), 27)
        self.assertEqual(sum((-1)**dim * topo.count(dim) for dim in range(4)), 1)
        self.assertEqual(len(topo.boundary()), 48)

    def test_tetrahedron_volume(self):
        topo, coords = mesh.unitcube(2, 'tetrahedron')
        a, b, c, d = coords[topo.cells.T]
        volumes = abs(numpy.linalg.det(numpy.stack([b - a, c - a, d - a], axis=1))) / 6
        self.assertTrue(numpy.allclose(volumes, 1/48))

    def test_invalid(self):
        with self.assertRaises(ValueError):
            mesh.unitcube(2, 'prism')
