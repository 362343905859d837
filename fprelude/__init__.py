# -*- coding: utf-8 -*
"""A small functional prelude for Python.

Partial application and currying by arity, anonymous recursion, and generic
functions with multiple dispatch on computed keys.

See ``dir(fprelude)`` and submodule docstrings for more.
"""

__version__ = '0.1.0'

from .arity import *  # noqa: F401, F403
from .dispatch import *  # noqa: F401, F403
from .dynassign import *  # noqa: F401, F403
from .fix import *  # noqa: F401, F403
from .fun import *  # noqa: F401, F403
