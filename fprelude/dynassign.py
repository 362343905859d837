# -*- coding: utf-8 -*-
"""Dynamic assignment, used for configuring `fprelude`.

Settings are dynamic variables: they have a global default, set with
``make_dynvar``, which can be overridden for the dynamic extent of a
``with dyn.let(...)`` block::

    from fprelude import dyn, partial

    add = partial(lambda x, y: x + y)
    with dyn.let(partial_oversupply="truncate"):
        assert add(1, 2, 3) == 3

Currently recognized settings:

  - ``partial_oversupply``: what a partial closure does when it is given more
    arguments than it still needs. See `fprelude.fun.make_partial`.
"""

__all__ = ["dyn", "make_dynvar"]

import threading

# Defaults, shared between threads.
_global_dynvars = {}

_L = threading.local()

_mainthread_stack = []
_mainthread_lock = threading.RLock()
def _getstack():
    if threading.current_thread() is threading.main_thread():
        return _mainthread_stack
    if not hasattr(_L, "_stack"):
        # Each new thread, when spawned, inherits the contents of the main thread's
        # dynamic scope stack.
        with _mainthread_lock:
            _L._stack = _mainthread_stack.copy()
    return _L._stack

class _EnvBlock:
    def __init__(self, bindings):
        self.bindings = bindings
    def __enter__(self):
        if self.bindings:  # skip pushing an empty scope
            _getstack().append(self.bindings)
    def __exit__(self, t, v, tb):
        if self.bindings:
            _getstack().pop()

class _Dyn:
    """Dynamic variables (like Racket's ``parameterize``).

      - Dynamic variables are introduced by ``with dyn.let()``, and exist
        during the dynamic extent of the with block.

      - The blocks can be nested. Inner definitions shadow outer ones.

      - Each thread has its own dynamic scope stack.

      - There is one global dynamic scope, shared between all threads, holding
        the default values set by ``make_dynvar``.

    Reading a variable that is bound nowhere raises ``AttributeError``.
    """
    def _resolve(self, name):
        for scope in reversed(_getstack()):
            if name in scope:
                return scope
        if name in _global_dynvars:  # default value from make_dynvar
            return _global_dynvars
        raise AttributeError(f"dynamic variable {repr(name)} is not defined")

    def __getattr__(self, name):
        """Read the value of a dynamic binding."""
        scope = self._resolve(name)
        return scope[name]

    def __setattr__(self, name, value):
        """Update an existing dynamic binding, in the closest enclosing scope that has it."""
        scope = self._resolve(name)
        scope[name] = value

    def let(self, **bindings):
        """Introduce dynamic bindings.

        Context manager; usage is ``with dyn.let(name=value, ...):``
        """
        return _EnvBlock(bindings)

    def __contains__(self, name):
        try:
            self._resolve(name)
            return True
        except AttributeError:
            return False

    def __repr__(self):  # pragma: no cover
        names = set(_global_dynvars).union(*_getstack())
        bindings = [f"{k}={repr(getattr(self, k))}" for k in sorted(names)]
        return f"<dyn object at 0x{id(self):x}: {{{', '.join(bindings)}}}>"
dyn = _Dyn()

def make_dynvar(**bindings):
    """Create a dynamic variable and set its default value.

    The default value is used when ``dyn`` is queried for the value outside the
    dynamic extent of any ``with dyn.let()`` blocks.

    Similar to (make-parameter) in Racket.
    """
    for name in bindings:
        _global_dynvars[name] = bindings[name]
