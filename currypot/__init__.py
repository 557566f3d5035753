# -*- coding: utf-8 -*
"""Currying with placeholders, for Python.

See ``dir(currypot)`` and submodule docstrings for more.
"""

__version__ = '0.1.0'

from .arity import *  # noqa: F401, F403
from .dynassign import *  # noqa: F401, F403
from .fun import *  # noqa: F401, F403
from .placeholder import *  # noqa: F401, F403
