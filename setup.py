from setuptools import setup

long_description = """
Femdofs is a Python library for numbering the degrees of freedom of finite
element spaces on unstructured meshes. It stores the incidence relations
between the vertices, edges, faces and cells of a mesh in compressed row
layout, derives the relations of every pair of topological dimensions from the
cell table alone, and combines a topology with an element's dof template into
a conforming global numbering.

Femdofs supports simplex and tensor product shapes in one to three dimensions,
continuous Lagrange and discontinuous elements, and provides mesh generators
for lines, unit squares and unit cubes.
"""

import os, re
with open(os.path.join('femdofs', '__init__.py')) as f:
  version = next(filter(None, map(re.compile("^__version__ = version = '([a-zA-Z0-9.]+)'$").match, f))).group(1)

setup(
  name = 'femdofs',
  version = version,
  description = 'Degree of freedom numbering over unstructured finite element meshes',
  packages = ['femdofs'],
  long_description = long_description,
  license = 'MIT',
  python_requires = '>=3.8',
  install_requires = ['numpy>=1.17', 'treelog>=1.0b5', 'stringly'],
  command_options = dict(
    test=dict(test_loader=('setup.py', 'unittest:TestLoader')),
  ),
)
