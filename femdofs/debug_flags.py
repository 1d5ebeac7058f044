import os
import warnings

_env = dict.fromkeys(filter(None, os.getenv('FEMDOFS_DEBUG', '').lower().split(':')), True)
_all = _env.pop('all', False)

numbering = _env.pop('numbering', _all)  # check completeness of the global dof numbering

if _env:
    warnings.warn('unused debug flags: {}'.format(', '.join(_env)))
