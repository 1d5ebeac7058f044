'Degree of freedom numbering over unstructured finite element meshes'

__version__ = version = '1.0'
version_name = None
long_version = ('{} "{}"' if version_name else '{}').format(version, version_name)

__all__ = [
    'cli',
    'connectivity',
    'element',
    'mesh',
    'space',
    'testing',
    'topology',
    'types',
    'warnings',
]

# vim:sw=4:sts=4:et
