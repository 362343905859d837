# -*- coding: utf-8 -*-
"""Partial application and currying, driven by arity.

`partial` makes any function partially applicable: arguments accumulate over
as many calls as it takes, and once there are enough of them, the function is
called. `curry` is the strict variant, taking exactly one argument per step.

    add3 = partial(lambda a, b, c: a + b + c)
    assert add3(1)(2)(3) == 6
    assert add3(1, 2)(3) == 6
    assert add3(1)(2, 3) == 6

    add5 = partial(lambda x, y: x + y, 5)
    assert add5(3) == 8

Calling an unsaturated partial closure with no arguments is a no-op, which
lets you pass it around without forcing it::

    assert add5()()(3) == 8

Every step makes a new closure; earlier closures in a chain are never
modified, so an intermediate closure can be reused freely.

The accumulation loop is written with `fprelude.fix.fixpoint`, so the closures
recurse into the next step without referring to themselves by name.
"""

__all__ = ["make_partial", "partial", "curry", "uncurry", "autopartial",
           "ispartial", "partial_state", "PartialState", "OversupplyError",
           "identity", "compose", "equals"]

from collections import namedtuple
from functools import wraps, reduce

from .arity import arity
from .dynassign import dyn, make_dynvar
from .fix import fixpoint

make_dynvar(partial_oversupply="forward")
_oversupply_policies = ("forward", "truncate", "reject", "passthrough")

class OversupplyError(TypeError):
    """Raised when a partial closure receives more arguments than its function takes."""

PartialState = namedtuple("PartialState", ["kind", "func", "params_left", "args"])

def ispartial(f):
    """Return whether `f` is a closure made by `make_partial` or `curry`."""
    return hasattr(f, "_partial_state")

def partial_state(f):
    """Return the state of partial closure `f`, as a `PartialState`.

    The fields are `kind` ("partial" or "curry"), `func` (the underlying
    function), `params_left` (how many arguments are still missing) and `args`
    (tuple of the arguments bound so far).
    """
    if not ispartial(f):
        raise TypeError(f"{repr(f)} is not a partial closure")
    return f._partial_state

def _mark(closure, kind, func, params_left, args):
    closure._partial_state = PartialState(kind, func, max(0, params_left), args)
    return closure

def _call(func, total_arity, args):
    """Call `func` on the accumulated `args`, honoring the over-supply policy."""
    if len(args) <= total_arity:
        return func(*args)
    policy = dyn.partial_oversupply
    if policy == "forward":
        return func(*args)
    if policy == "truncate":
        return func(*args[:total_arity])
    if policy == "reject":
        raise OversupplyError(f"{_name(func)} takes {total_arity} positional arguments, but {len(args)} were given: {args}")
    if policy == "passthrough":
        result = func(*args[:total_arity])
        if not callable(result):
            raise OversupplyError(f"{_name(func)} returned the non-callable {repr(result)}, cannot pass through the extra arguments {args[total_arity:]}")
        return result(*args[total_arity:])
    raise ValueError(f"Unknown partial_oversupply policy {repr(policy)}; expected one of {_oversupply_policies}")

def _name(func):
    return getattr(func, "__qualname__", repr(func))

def _saturated(fn, total_arity, args, kind):
    @wraps(fn)
    def thunk(*more):
        return _call(fn, total_arity, args + more)
    return _mark(thunk, kind, fn, 0, args)

def make_partial(fn, total_arity, *args):
    """Make `fn` partially applicable, given its arity and some arguments to bind now.

    If the arguments already saturate `fn`, return a thunk that calls `fn`
    when invoked with no arguments.

    Otherwise, return a closure that accepts any number of further arguments:

      - With no arguments, it returns an equivalent closure (same arguments
        bound, same number still missing).

      - With some arguments, they are appended to those bound so far. If this
        saturates `fn`, it is called and its return value is returned;
        otherwise, a new closure is returned.

    If the closure receives more arguments than `fn` still needs, what happens
    depends on the dynamic variable ``partial_oversupply``:

      - ``"forward"`` (default): call `fn` with all the arguments anyway.
        A function that takes ``*args`` accepts the extras; one that doesn't
        raises ``TypeError``, as Python usually does.
      - ``"truncate"``: drop the extra arguments.
      - ``"reject"``: raise `OversupplyError`.
      - ``"passthrough"``: call `fn` with the arguments it takes, and then call
        its return value with the rest. The return value must be callable.

    `total_arity` is used as-is; it is not checked against `fn`. See `partial`
    for the version that inspects it.
    """
    if not isinstance(total_arity, int) or isinstance(total_arity, bool) or total_arity < 0:
        raise ValueError(f"total_arity must be a non-negative integer, got {repr(total_arity)}")

    def partial_step(rec):
        def step(params_left, args):
            if params_left <= 0:
                return _saturated(fn, total_arity, args, "partial")

            @wraps(fn)
            def partially_applied(*more):
                if not more:
                    return rec(params_left, args)
                if params_left - len(more) > 0:
                    return rec(params_left - len(more), args + more)
                return _call(fn, total_arity, args + more)
            return _mark(partially_applied, "partial", fn, params_left, args)
        return step
    return fixpoint(partial_step)(total_arity - len(args), args)

def partial(fn, *args):
    """Make `fn` partially applicable, optionally binding some arguments now.

    Like `make_partial`, but the arity of `fn` is inspected (see
    `fprelude.arity.arity`).

    Example::

        add5 = partial(lambda x, y: x + y, 5)
        mul3 = partial(lambda x, y: x * y, 3)
        assert mul3(add5(3)) == 24
    """
    return make_partial(fn, arity(fn), *args)

def curry(fn):
    """Curry `fn`: take its arguments one at a time.

    Each step accepts exactly one argument; anything else is a ``TypeError``.
    The last step calls `fn`::

        add3 = curry(lambda a, b, c: a + b + c)
        assert add3(1)(2)(3) == 6

    If `fn` takes no arguments, this returns a thunk, like `make_partial`.
    """
    total_arity = arity(fn)

    def curry_step(rec):
        def step(params_left, args):
            if params_left <= 0:
                return _saturated(fn, total_arity, args, "curry")

            @wraps(fn)
            def curried(x):
                if params_left > 1:
                    return rec(params_left - 1, args + (x,))
                return fn(*args, x)
            return _mark(curried, "curry", fn, params_left, args)
        return step
    return fixpoint(curry_step)(total_arity, ())

def uncurry(f):
    """Inverse of `curry`: take all the remaining arguments at once.

    `f` is usually a function made by `curry`. The arguments are fed to it
    one at a time::

        add3 = curry(lambda a, b, c: a + b + c)
        assert uncurry(add3)(1, 2, 3) == 6
        assert uncurry(add3(1))(2, 3) == 6

    Passing fewer arguments than `f` still needs raises ``TypeError``.

    If `f` is not curried, the arguments are passed to it in a regular call,
    after the same check.
    """
    @wraps(f, updated=())
    def uncurried(*args):
        if ispartial(f):
            needed = partial_state(f).params_left
        else:
            needed = arity(f)
        if len(args) < needed:
            raise TypeError(f"Not enough arguments for call: {_name(f)} needs {needed}, got {len(args)}")
        if not ispartial(f) or partial_state(f).kind != "curry":
            return f(*args)
        if not needed:
            return f()
        return reduce(lambda g, x: g(x), args, f)
    return uncurried

def autopartial(f):
    """Decorator. Make `f` partially applicable by default.

    Calling the decorated function with all of its arguments calls it as
    usual. Calling it with fewer returns a partial closure (see `partial`)::

        @autopartial
        def add(x, y):
            return x + y
        assert add(1, 2) == 3
        assert add(1)(2) == 3

    Over-supply follows the ``partial_oversupply`` policy.
    """
    n = arity(f)
    @wraps(f)
    def autopartialized(*args):
        p = make_partial(f, n, *args)
        if len(args) >= n:
            return p()
        return p
    return autopartialized

@autopartial
def identity(x):
    """Return x."""
    return x

def compose(*fs):
    """Compose unary functions, right to left.

    ``compose(f, g, h)(x)`` is ``f(g(h(x)))``. With no functions, return
    `identity`.
    """
    def compose2(acc, f):
        return lambda x: acc(f(x))
    return reduce(compose2, fs, identity)

@autopartial
def equals(x, y):
    """Strict equality.

    `x` and `y` must be of the same type, and equal. Lists, tuples and dicts
    are compared element-wise by the same rule, dict keys included. So ``1``,
    ``1.0`` and ``True`` are all different here, and so are ``[1]`` and ``(1,)``.
    """
    if type(x) is not type(y):
        return False
    if isinstance(x, (list, tuple)):
        return len(x) == len(y) and all(equals(a, b) for a, b in zip(x, y))
    if isinstance(x, dict):
        # Pair up the keys strictly, too; a dict lookup would equate 1, 1.0 and True.
        if len(x) != len(y):
            return False
        for kx, vx in x.items():
            matches = [ky for ky in y if equals(kx, ky)]
            if len(matches) != 1 or not equals(vx, y[matches[0]]):
                return False
        return True
    return bool(x == y)
