# -*- coding: utf-8; -*-

from ..fix import fixpoint, withself

def runtests():
    # factorial, without naming the function inside its own body
    fact = fixpoint(lambda rec: lambda n: 1 if n == 0 else n * rec(n - 1))
    assert fact(0) == 1
    assert fact(5) == 120

    # the worker may take several arguments, also by name
    fact_acc = fixpoint(lambda rec: lambda n, acc=1: acc if n == 0 else rec(n - 1, acc=n * acc))
    assert fact_acc(5) == 120
    assert fact_acc(n=3) == 6

    # mutual recursion, by dispatching on a flag
    def parity(rec):
        def worker(which, n):
            if n == 0:
                return which == "even"
            return rec("odd" if which == "even" else "even", n - 1)
        return worker
    evenodd = fixpoint(parity)
    assert evenodd("even", 10)
    assert not evenodd("even", 7)
    assert evenodd("odd", 7)

    # the generator runs once per level; the recursive call is a fresh closure each time
    calls = []
    def counting(rec):
        calls.append(rec)
        return lambda n: n if n == 0 else rec(n - 1)
    assert fixpoint(counting)(3) == 0
    assert len(calls) == 4

    # the combinator enforces no termination; the worker's base case does
    loop = fixpoint(lambda rec: lambda n: rec(n + 1))
    try:
        loop(0)
    except RecursionError:
        pass
    else:
        assert False

    fib = withself(lambda self, n: n if n < 2 else self(n - 1) + self(n - 2))
    assert [fib(k) for k in range(8)] == [0, 1, 1, 2, 3, 5, 8, 13]

    @withself
    def countdown(self, n):
        return [] if n == 0 else [n] + self(n - 1)
    assert countdown(3) == [3, 2, 1]

    print("All tests PASSED")

if __name__ == '__main__':
    runtests()
