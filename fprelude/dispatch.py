# -*- coding: utf-8; -*-
"""Generic functions with multiple dispatch on computed keys (in the spirit of CLOS).

Terminology:

  - A *generic function* is a name in a `Dispatcher`, together with its
    *dispatching function*, which computes a dispatch key from the arguments.
  - Its individual implementations are *methods*. Each method is registered
    with the *pattern* of dispatch keys it handles.

There is no type system involved. The "type" of a call is whatever the
dispatching function says it is, so the same machinery does tag-based,
shape-based and value-based dispatch::

    d = make_dispatcher()
    d = defgeneric(d, "++", lambda a, b: "text" if isinstance(a, str) and isinstance(b, str) else "seq")
    d = defmethod(d, "++", "text", lambda a, b: a + b)
    d = defmethod(d, "++", "seq", lambda a, b: [*a, *b])

    assert dispatch(d, "++", ["ab", "cd"]) == "abcd"
    assert dispatch(d, "++", [[1, 2], [3, 4]]) == [1, 2, 3, 4]

**Computing the keys**: if the dispatching function takes one argument, it is
applied to each argument of the call separately, giving one key per argument;
a method pattern is then a list such as ``["int", "str"]``. Otherwise the
dispatching function must take exactly as many arguments as the call has, and
is called once on all of them, giving a single key.

**The first method that matches wins, in registration order.** There is no
most-specific-method resolution. Matching uses `fprelude.fun.equals`, so there
is no coercion: the key ``1`` does not match the pattern ``True``.

**Dispatchers are values.** `defgeneric` and `defmethod` return a new
`Dispatcher`, and never modify the one they were given. Anyone still holding
an older dispatcher keeps seeing the registry as it was. The entries are
immutable, so the new dispatcher shares them with the old one, instead of
deep-copying everything. Patterns may contain mutable keys, so they are
deep-copied on the way in (`defmethod`) and on the way out (lookup,
`list_methods`).

`defgeneric`, `defmethod`, `dispatch`, `isgeneric` and `list_methods` are
partially applicable (see `fprelude.fun.autopartial`)::

    concat = dispatch(d, "++")
    assert concat(["ab", "cd"]) == "abcd"
"""

__all__ = ["Dispatcher", "GenericEntry", "MethodEntry",
           "make_dispatcher", "defgeneric", "defmethod", "dispatch",
           "isgeneric", "list_methods", "format_methods",
           "DispatchError", "DuplicateDefinitionError", "UndefinedGenericError",
           "ArityMismatchError", "NoMatchingMethodError"]

from collections import namedtuple
from collections.abc import Mapping
import copy
import inspect
import os
from warnings import warn

from .arity import arity
from .fun import autopartial, equals

class DispatchError(Exception):
    """Base class for errors raised by the generic function machinery."""

class DuplicateDefinitionError(DispatchError, ValueError):
    """Raised when defining a generic function whose name is already taken."""

class UndefinedGenericError(DispatchError, LookupError):
    """Raised when referring to a generic function that has not been defined."""

class ArityMismatchError(DispatchError, TypeError):
    """Raised when the dispatching function cannot accept the arguments of a call."""

class NoMatchingMethodError(DispatchError, TypeError):
    """Raised when no method matches the dispatch keys of a call."""

GenericEntry = namedtuple("GenericEntry", ["dispatching_function", "methods"])
GenericEntry.__doc__ = """A generic function: its dispatching function, and a tuple of `MethodEntry`."""

MethodEntry = namedtuple("MethodEntry", ["pattern", "function"])
MethodEntry.__doc__ = """A method: the tuple of dispatch keys it handles, and its implementation."""

class Dispatcher(Mapping):
    """Read-only mapping of generic function names to `GenericEntry`.

    Make one with `make_dispatcher`, and extend it with `defgeneric` and
    `defmethod`, which return new dispatchers.
    """
    def __init__(self, entries=None):
        self._entries = dict(entries) if entries else {}
    def __getitem__(self, name):
        # Entries are shared with other dispatchers; hand out patterns detached from them.
        return _detached(self._entries[name])
    def __contains__(self, name):
        return name in self._entries
    def __iter__(self):
        return iter(self._entries)
    def __len__(self):
        return len(self._entries)
    def __repr__(self):  # pragma: no cover
        return f"<Dispatcher at 0x{id(self):x}: {list(self._entries)}>"

    def _updated(self, name, entry):
        """Return a new dispatcher with `name` bound to `entry`."""
        entries = copy.copy(self._entries)
        entries[name] = entry
        return Dispatcher(entries)

def make_dispatcher():
    """Return a new, empty `Dispatcher`."""
    return Dispatcher()

@autopartial
def defgeneric(dispatcher, name, dispatching_function):
    """Define the generic function `name`, and return the new dispatcher.

    `dispatching_function` computes the dispatch key. It takes either one
    argument (applied to each argument of a call separately), or exactly as
    many as the calls will have.

    Raises `DuplicateDefinitionError` if `name` is already defined in
    `dispatcher`.
    """
    if name in dispatcher:
        raise DuplicateDefinitionError(f"Generic function {repr(name)} defined twice")
    if not callable(dispatching_function):
        raise TypeError(f"Dispatching function of {repr(name)} must be callable, got {repr(dispatching_function)}")
    return dispatcher._updated(name, GenericEntry(dispatching_function, ()))

@autopartial
def defmethod(dispatcher, name, pattern, function):
    """Add a method to the generic function `name`, and return the new dispatcher.

    `pattern` is the sequence of dispatch keys the method handles, as a list
    or tuple. Any other value is shorthand for a single key; to match a single
    key that is itself a list or tuple, wrap it: ``[("a", "b")]``.

    Methods are tried in the order they were added. A method whose pattern
    is the same as that of an earlier method is registered, but can never be
    reached; this emits a warning.

    Raises `UndefinedGenericError` if `name` is not defined in `dispatcher`.
    """
    entry = _lookup(dispatcher, name)
    pattern = _normalize_pattern(pattern)
    if any(equals(method.pattern, pattern) for method in entry.methods):
        warn(f"Generic function {repr(name)} already has a method for {repr(list(pattern))}; the new method is unreachable.",
             UserWarning, stacklevel=_caller_stacklevel())
    methods = entry.methods + (MethodEntry(pattern, function),)
    return dispatcher._updated(name, entry._replace(methods=methods))

@autopartial
def dispatch(dispatcher, name, args):
    """Call the generic function `name` on the sequence `args`.

    Computes the dispatch keys, and calls the first matching method with
    the original `args`.

    Raises:
        `UndefinedGenericError` if `name` is not defined,
        `ArityMismatchError` if the dispatching function takes neither one
        argument nor as many as there are `args`,
        `NoMatchingMethodError` if no method matches.
    """
    entry = _lookup(dispatcher, name)
    args = tuple(args)
    keys = _dispatch_keys(name, entry.dispatching_function, args)
    for method in entry.methods:
        if equals(method.pattern, keys):
            return method.function(*args)
    raise NoMatchingMethodError(f"No method of generic function {repr(name)} matches the dispatch keys {repr(list(keys))}.\n"
                                f"{format_methods(dispatcher, name)}")

@autopartial
def isgeneric(dispatcher, name):
    """Return whether `name` is a generic function defined in `dispatcher`."""
    return name in dispatcher

@autopartial
def list_methods(dispatcher, name):
    """Return a list of the methods of `name`, in the order they are tried.

    Each item is `(pattern, function)`, where `pattern` is a tuple of dispatch keys.
    """
    return [tuple(method) for method in _detached(_lookup(dispatcher, name)).methods]

def format_methods(dispatcher, name):
    """Format, as a string, a human-readable list of the methods of `name`."""
    entry = _lookup(dispatcher, name)
    if entry.methods:
        methods_list = [f"  {repr(list(pattern))} -> {_format_callable(function)}"
                        for pattern, function in entry.methods]
        methods_str = "\n".join(methods_list)
    else:
        methods_str = "  <no methods registered>"
    return (f"Methods for generic function {repr(name)}, dispatching on "
            f"{_format_callable(entry.dispatching_function)} (in match order):\n{methods_str}")

# --------------------------------------------------------------------------------

def _lookup(dispatcher, name):
    """Return the `GenericEntry` of `name`, as stored. Not for handing out to callers."""
    try:
        return dispatcher._entries[name]
    except KeyError:
        raise UndefinedGenericError(f"No generic function named {repr(name)}") from None

def _detached(entry):
    """Return a copy of `entry` whose patterns share no mutable objects with it."""
    methods = tuple(method._replace(pattern=copy.deepcopy(method.pattern))
                    for method in entry.methods)
    return entry._replace(methods=methods)

def _caller_stacklevel():
    """Return the `warn` stacklevel of the nearest call site outside this library.

    How deep the library's own frames go depends on how the operation was
    partially applied, so we look at the stack. The library's tests are
    outside it.
    """
    libdir = os.path.dirname(os.path.abspath(__file__))
    stack = inspect.stack(context=0)
    # stack[0] is us; stack[1], the function calling `warn`, is stacklevel 1.
    for k in range(1, len(stack)):
        if os.path.dirname(os.path.abspath(stack[k].filename)) != libdir:
            return k
    return 1  # pragma: no cover

def _normalize_pattern(pattern):
    """Return `pattern` as a tuple of keys, detached from the caller's object."""
    if isinstance(pattern, (list, tuple)):
        return tuple(copy.deepcopy(list(pattern)))
    return (copy.deepcopy(pattern),)

def _dispatch_keys(name, dispatching_function, args):
    """Compute the tuple of dispatch keys for a call of `name` with `args`."""
    n = arity(dispatching_function)
    if n == 1:
        return tuple(dispatching_function(x) for x in args)
    if n == len(args):
        return (dispatching_function(*args),)
    raise ArityMismatchError(f"Dispatching function of {repr(name)} takes {n} arguments, so it cannot dispatch a call with {len(args)}; "
                             f"it must take either one argument, or as many as the call has")

def _format_callable(thecallable):
    name = getattr(thecallable, "__qualname__", None) or repr(thecallable)
    module = getattr(thecallable, "__module__", None)
    return f"{module}.{name}" if module else name
