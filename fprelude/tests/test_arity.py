# -*- coding: utf-8 -*-

import operator

from ..arity import arities, arity, arity_includes, getfunc, UnknownArity
from ..fun import partial, curry

def runtests():
    def barefunction(x):
        pass  # pragma: no cover

    class AnalysisTarget:
        def instmeth(self, x):
            pass  # pragma: no cover
        @classmethod
        def classmeth(cls, x, y):
            pass  # pragma: no cover
        @staticmethod
        def staticmeth(x):
            pass  # pragma: no cover
    target = AnalysisTarget()

    def kindof(thecallable):
        function, kind = getfunc(thecallable)
        return kind
    assert kindof(barefunction) == "function"
    assert kindof(AnalysisTarget.instmeth) == "function"  # not bound to an instance
    assert kindof(target.instmeth) == "instancemethod"
    assert kindof(AnalysisTarget.classmeth) == "classmethod"
    assert kindof(target.staticmeth) == "function"

    # arity counts declared positional parameters
    assert arity(lambda: None) == 0
    assert arity(lambda x: None) == 1
    assert arity(lambda x, y: None) == 2
    assert arity(lambda x, y=2: None) == 2  # optional ones count, too
    assert arity(lambda x, *args: None) == 1  # *args doesn't
    assert arity(lambda *args: None) == 0
    assert arity(lambda x, *, y: None) == 1  # neither do keyword-only ones
    assert arity(lambda x, **kw: None) == 1

    # self/cls is passed implicitly, so it doesn't count for bound methods
    assert arity(target.instmeth) == 1
    assert arity(AnalysisTarget.instmeth) == 2
    assert arity(AnalysisTarget.classmeth) == 2
    assert arity(target.staticmeth) == 1

    # callable objects
    class Adder:
        def __call__(self, a, b):
            return a + b
    assert arity(Adder()) == 2

    # builtins
    assert arity(operator.add) == 2
    assert arity(len) == 1
    assert arity(max) == 1  # no fixed upper limit, so the minimum

    assert arities(lambda x, y=2: None) == (1, 2)
    assert arities(lambda x, *args: None) == (1, float("+inf"))
    assert arity_includes(lambda x, y=2: None, 1)
    assert arity_includes(lambda x, y=2: None, 2)
    assert not arity_includes(lambda x, y=2: None, 3)

    # partial closures report how many arguments they still need
    add3 = lambda a, b, c: a + b + c
    assert arity(partial(add3)) == 3
    assert arity(partial(add3, 1)) == 2
    assert arity(partial(add3)(1, 2)) == 1
    assert arity(partial(add3, 1, 2, 3)) == 0
    assert arity(curry(add3)) == 1
    assert arity(curry(add3)(1)(2)) == 1
    assert arity(curry(lambda: 42)) == 0

    class Uninspectable:
        __signature__ = 42  # not a Signature
        def __call__(self):
            pass  # pragma: no cover
    try:
        arity(Uninspectable())
    except UnknownArity:
        pass
    else:
        assert False

    print("All tests PASSED")

if __name__ == '__main__':
    runtests()
