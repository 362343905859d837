# -*- coding: utf-8 -*-
"""Inspect the arity of a callable.

This module uses ``inspect`` out of necessity. The arity of a callable is the
number of positional parameters it declares; that is what the partial
application engine and the dispatcher count against.
"""

__all__ = ["getfunc", "arities", "arity", "arity_includes", "UnknownArity"]

from inspect import signature, Parameter, ismethod
import operator

class UnknownArity(ValueError):
    """Raised when the arity of a function cannot be inspected."""

# Some built-ins cannot be inspected, or report something unhelpful.
#
# Full list of built-ins:
#   https://docs.python.org/3/library/functions.html
_infty = float("+inf")
_builtin_arities = {abs: (1, 1),
                    all: (1, 1),
                    any: (1, 1),
                    bool: (1, 1),       # bool(x)
                    callable: (1, 1),
                    divmod: (2, 2),
                    float: (1, 1),      # float(x)
                    getattr: (2, 3),
                    hasattr: (2, 2),
                    hash: (1, 1),
                    id: (1, 1),
                    isinstance: (2, 2),
                    issubclass: (2, 2),
                    len: (1, 1),
                    max: (1, _infty),   # max(iterable), max(a1, a2, ...)
                    min: (1, _infty),   # min(iterable), min(a1, a2, ...)
                    pow: (2, 3),
                    repr: (1, 1),
                    round: (1, 2),
                    str: (0, 3),        # see help(str)
                    sum: (1, 2),
                    type: (1, 3),       # FIXME: exactly 1 or 3: type(object), type(name, bases, dict)
                    # operator module
                    operator.lt: (2, 2),
                    operator.le: (2, 2),
                    operator.eq: (2, 2),
                    operator.ne: (2, 2),
                    operator.ge: (2, 2),
                    operator.gt: (2, 2),
                    operator.not_: (1, 1),
                    operator.truth: (1, 1),
                    operator.is_: (2, 2),
                    operator.is_not: (2, 2),
                    operator.abs: (1, 1),
                    operator.add: (2, 2),
                    operator.and_: (2, 2),
                    operator.floordiv: (2, 2),
                    operator.mod: (2, 2),
                    operator.mul: (2, 2),
                    operator.neg: (1, 1),
                    operator.or_: (2, 2),
                    operator.pos: (1, 1),
                    operator.pow: (2, 2),
                    operator.sub: (2, 2),
                    operator.truediv: (2, 2),
                    operator.xor: (2, 2),
                    operator.concat: (2, 2),
                    operator.contains: (2, 2),
                    operator.getitem: (2, 2)}

def getfunc(f):
    """Given a function or method, return the underlying function.

    Return value is a tuple ``(function, kind)``, where ``kind`` is one of
    "function", "instancemethod", "classmethod", "staticmethod".
    """
    if ismethod(f):
        # If __self__ points to a class, it's a @classmethod, otherwise a regular instance method.
        if isinstance(f.__self__, type):
            kind = "classmethod"
        else:
            kind = "instancemethod"
        raw_function = f.__func__
    elif isinstance(f, staticmethod):
        kind = "staticmethod"
        raw_function = f.__func__
    elif isinstance(f, classmethod):
        kind = "classmethod"
        raw_function = f.__func__
    else:
        kind = "function"
        raw_function = f
    return (raw_function, kind)

def arities(f):
    """Inspect f's minimum and maximum positional arity.

    For bound methods, ``self`` or ``cls`` does not count toward the arity,
    because these are passed implicitly by Python.

    Partial closures made by `fprelude.fun` report their remaining arity,
    not the arity of the function they wrap.

    Returns:
        `(min_arity, max_arity)`: (int, int_or_infinity)
            where ``max_arity >= min_arity``. If ``f`` takes ``*args``,
            then ``max_arity == float("+inf")``.

    Raises:
        UnknownArity
            If inspection failed.
    """
    # Partial closures wrap `f` with `functools.wraps`, so `inspect.signature`
    # would see the signature of the original function. Ask the closure instead.
    from .fun import ispartial, partial_state  # circular import
    if ispartial(f):
        kind, func, params_left, args = partial_state(f)
        n = min(1, params_left) if kind == "curry" else params_left
        return n, n

    f, kind = getfunc(f)
    try:
        if f in _builtin_arities:
            return _builtin_arities[f]
    except TypeError:  # f is of an unhashable type
        pass

    try:
        lower = 0
        upper = 0
        poskinds = set((Parameter.POSITIONAL_ONLY,
                        Parameter.POSITIONAL_OR_KEYWORD))
        for _, v in signature(f).parameters.items():
            if v.kind in poskinds:
                upper += 1
                if v.default is Parameter.empty:
                    lower += 1  # no default --> required parameter
            elif v.kind is Parameter.VAR_POSITIONAL:
                upper = _infty  # no upper limit
        if kind in ("instancemethod", "classmethod"):  # self/cls is passed implicitly
            lower -= 1
            upper -= 1
        return lower, upper
    except (TypeError, ValueError) as e:  # likely an uninspectable method of a builtin
        raise UnknownArity(*e.args)

def arity(f):
    """Return the number of positional parameters `f` declares.

    Parameters with a default count; ``*args``, keyword-only parameters and
    ``**kwargs`` do not. Examples::

        arity(lambda: None) == 0
        arity(lambda x, y=2: None) == 2
        arity(lambda x, *args: None) == 1

    For built-ins with a variable number of arguments and no fixed upper
    limit (such as ``max``), this is the minimum arity.

    Raises ``UnknownArity`` if inspection failed.
    """
    lower, upper = arities(f)
    if upper != _infty:
        return upper
    function, kind = getfunc(f)
    try:
        if function in _builtin_arities:
            return lower
    except TypeError:  # unhashable
        pass
    # *args adds nothing to the count of declared parameters.
    poskinds = set((Parameter.POSITIONAL_ONLY,
                    Parameter.POSITIONAL_OR_KEYWORD))
    n = sum(1 for v in signature(function).parameters.values() if v.kind in poskinds)
    if kind in ("instancemethod", "classmethod"):
        n -= 1
    return n

def arity_includes(f, n):
    """Check whether f's positional arity includes n.

    I.e., return whether ``f()`` can be called with ``n`` positional arguments.
    """
    lower, upper = arities(f)
    return lower <= n <= upper
