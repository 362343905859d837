# -*- coding: utf-8; -*-
"""Anonymous recursion.

`fixpoint` is the Z combinator, i.e. the applicative-order Y combinator. It
gives a function a way to call itself without being bound to a name, which is
exactly what a lambda, or a closure built on the fly, lacks::

    fact = fixpoint(lambda rec: lambda n: 1 if n == 0 else n * rec(n - 1))
    assert fact(5) == 120

The generator receives "the recursive call" and returns the worker. Each
recursive call resolves through the same self-application, so the generator
runs again at every level; it should be cheap and pure.

`withself` is the same idea packaged as a decorator, for when you'd rather
receive the self-reference as a parameter of the worker itself.

Related reading:

    https://en.wikipedia.org/wiki/Fixed-point_combinator#Strict_fixed-point_combinator
    https://www.parsonsmatt.org/2016/10/26/grokking_fix.html
"""

__all__ = ["fixpoint", "withself"]

from functools import wraps

def fixpoint(generator):
    """Return the fixed point of `generator`.

    `generator` takes one argument, the recursive call, and returns the worker
    function. The return value is a function `f` such that calling `f` behaves
    as if `generator` had been given `f` itself.

    The worker may take any number of positional and named arguments; they
    are passed through as-is.

    Termination is the worker's responsibility. Each level of recursion costs
    a few Python stack frames, so very deep recursion will hit the recursion
    limit sooner than a plain recursive `def`.
    """
    def selfapply(g):
        def recursive(*args, **kwargs):
            return generator(g(g))(*args, **kwargs)
        return recursive
    return selfapply(selfapply)

def withself(f):
    """Decorator. Allow a lambda to refer to itself.

    This is essentially the Y combinator trick packaged as a decorator.

    The reference to the lambda itself (the ``self`` argument) is passed as the
    first positional argument. It is declared explicitly, but passed implicitly,
    just like the ``self`` argument of a method.

    Note there is no point using this with named functions, because they can
    already refer to themselves via the name.

    Example::

        fact = withself(lambda self, n: n * self(n - 1) if n > 1 else 1)
        assert fact(5) == 120
    """
    @wraps(f)
    def fwithself(*args, **kwargs):
        return f(fwithself, *args, **kwargs)
    return fwithself
