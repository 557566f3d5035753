# -*- coding: utf-8 -*-
"""Currying with placeholders.

A curried function accepts its positional arguments over any number of calls,
and calls the original function as soon as all of its first `arity` slots
hold a value::

    from currypot import curry, _

    add3 = curry(lambda a, b, c: a + b + c)
    assert add3(1)(2)(3) == 6
    assert add3(1, 2)(3) == 6
    assert add3(1)(2, 3) == 6
    assert add3()()(1, 2, 3) == 6  # empty calls are no-ops

A placeholder leaves a slot open; later arguments fill the open slots from
left to right before being appended::

    triples = curry(lambda a, b, c: (a, b, c))
    assert triples(_, 2, 3)(1) == (1, 2, 3)
    assert triples(_, _, 3)(_, 2)(1) == (1, 2, 3)
    assert triples(1)(_, 3)(2) == (1, 2, 3)

Curried functions are immutable. Every call that does not complete the
argument list returns a *new* curried function, so intermediate results can
be reused freely.
"""

__all__ = ["curry", "curry_to", "curry_proto",
           "iscurried", "getsource", "uncurry", "getarity",
           "Curried", "CurryState", "advance",
           "merge_arguments", "isready", "finalize_arguments",
           "InvalidArgumentError", "InvalidArityError"]

from collections import namedtuple
from functools import update_wrapper
from types import MethodType
import operator

from .arity import declared_arity, UnknownArity
from .dynassign import dyn, make_dynvar
from .placeholder import _, isplaceholder

make_dynvar(curry_capped=True)

class InvalidArgumentError(TypeError):
    """Raised when something that is not callable is given for currying."""

class InvalidArityError(ValueError):
    """Raised when an arity is not a finite non-negative integer."""

_unspecified = object()

# actions
_call = object()
_keep_currying = object()

CurryState = namedtuple("CurryState", ["func", "arity", "capped", "args", "kwargs"])
CurryState.__doc__ = """Everything a curried function knows.

    func: the source (original, uncurried) function.
    arity: how many leading positional slots must be filled before `func` is called.
    capped: whether positional arguments beyond `arity` are dropped at the final call.
    args: tuple of positional arguments (and placeholders) accumulated so far.
    kwargs: dict of named arguments accumulated so far. Never mutated.
"""

def merge_arguments(prev, curr):
    """Combine previously accumulated arguments with those of the current call.

    Each placeholder in `prev`, left to right, is replaced by the next unused
    item of `curr`. When `curr` runs out, the remaining placeholders stay as
    they are. Whatever is left of `curr` is appended::

        merge_arguments((_, 2, _), (1,))        # --> (1, 2, _)
        merge_arguments((_, _, 3), (_, 2))      # --> (_, 2, 3)
        merge_arguments((1,), (2, 3))           # --> (1, 2, 3)

    Note a placeholder in `curr` may replace a placeholder in `prev`; that
    slot simply stays open.
    """
    merged = []
    index = 0
    n = len(curr)
    for x in prev:
        if index < n and isplaceholder(x):
            merged.append(curr[index])
            index += 1
        else:
            merged.append(x)
    merged.extend(curr[index:])
    return tuple(merged)

def isready(args, arity):
    """Return whether `args` fills all of the first `arity` slots.

    Placeholders beyond the first `arity` slots do not matter.
    """
    if len(args) < arity:
        return False
    for i in range(arity):
        if isplaceholder(args[i]):
            return False
    return True

def finalize_arguments(args, arity, capped):
    """Compute the positional arguments for the final call of the source function.

    Capped: just the first `arity` ones.

    Uncapped: the extra arguments are passed through, but placeholders must
    not leak into the source function. Trailing placeholders are dropped, so
    that any defaults of the source function apply; placeholders followed by
    a real value become ``None``.
    """
    if capped or len(args) <= arity:
        return args[:arity]
    extra = list(args[arity:])
    while extra and isplaceholder(extra[-1]):
        extra.pop()
    return args[:arity] + tuple(None if isplaceholder(x) else x for x in extra)

def advance(state, args, kwargs):
    """Take one currying step. Pure; `state` is not modified.

    Returns ``(action, payload)``:

      - ``(_keep_currying, new_state)`` if slots remain open,
      - ``(_call, (args, kwargs))`` when the source function should be called
        with these arguments.

    Named arguments are merged with the latest value winning, like
    `functools.partial` does; they do not count toward the arity.
    """
    merged = merge_arguments(state.args, args)
    mergedkw = {**state.kwargs, **kwargs} if kwargs else state.kwargs
    if isready(merged, state.arity):
        finalkw = {k: v for k, v in mergedkw.items() if not isplaceholder(v)}
        return _call, (finalize_arguments(merged, state.arity, state.capped), finalkw)
    return _keep_currying, state._replace(args=merged, kwargs=mergedkw)

class Curried:
    """A curried function. Create these with `curry`.

    Calling with no arguments returns the same object. Otherwise returns
    either a new `Curried` (more slots to fill) or the return value of the
    source function.

    Like a regular function, a `Curried` stored in a class binds as a method:
    the instance becomes the first positional argument.
    """
    def __init__(self, state):
        # `updated=()`: a class source must not have its `__dict__` copied onto us.
        update_wrapper(self, state.func, updated=())
        self._state = state

    def __call__(self, *args, **kwargs):
        if not args and not kwargs:
            return self
        action, payload = advance(self._state, args, kwargs)
        if action is _call:
            finalargs, finalkwargs = payload
            return self._state.func(*finalargs, **finalkwargs)
        assert action is _keep_currying, action
        return Curried(payload)

    def __get__(self, instance, owner=None):
        if instance is None:
            return self
        return MethodType(self, instance)

    @property
    def state(self):
        """The `CurryState` of this curried function."""
        return self._state
    @property
    def func(self):
        """The source (original, uncurried) function."""
        return self._state.func
    @property
    def arity(self):
        return self._state.arity
    @property
    def capped(self):
        return self._state.capped
    @property
    def args(self):
        """Positional arguments accumulated so far, placeholders included."""
        return self._state.args
    @property
    def kwargs(self):
        """Copy of the named arguments accumulated so far."""
        return dict(self._state.kwargs)
    @property
    def pending(self):
        """How many of the first `arity` slots are still missing or placeholders."""
        args, arity = self._state.args, self._state.arity
        return sum(1 for i in range(arity) if i >= len(args) or isplaceholder(args[i]))

    def __repr__(self):
        state = self._state
        accumulated = [repr(x) for x in state.args]
        accumulated.extend("{}={}".format(k, repr(v)) for k, v in state.kwargs.items())
        applied = " applied to ({})".format(", ".join(accumulated)) if accumulated else ""
        return "<curried {}{}>".format(repr(state.func), applied)

def _resolve_arity(arity):
    try:
        n = operator.index(arity)
    except TypeError as err:
        # `is_integer` is False for NaN and the infinities.
        if not (isinstance(arity, float) and arity.is_integer()):
            raise InvalidArityError("Invalid arity value: {}".format(repr(arity))) from err
        n = int(arity)
    if n < 0:
        raise InvalidArityError("Invalid arity value: {}".format(repr(arity)))
    return n

def _resolve_capped(capped):
    if capped is _unspecified:
        return dyn.curry_capped
    return bool(capped)

def curry(f=_unspecified, *, arity=_unspecified, capped=_unspecified):
    """Decorator: curry the function f.

    **Examples**::

        @curry
        def add3(a, b, c):
            return a + b + c
        assert add3(1)(2)(3) == 6
        assert add3(1, 2)(3) == 6
        assert add3(_, 2, 3)(1) == 6

    `arity`: the number of positional arguments to collect before calling `f`.
    Default is the declared arity of `f` (see `currypot.arity.declared_arity`),
    so parameters with defaults and ``*args`` do not count. Giving it explicitly
    also allows currying callables whose signature cannot be inspected.

    `capped`: if true, positional arguments beyond `arity` are discarded before
    calling `f`; if false, they are passed through. Default is taken from the
    dynamic variable ``dyn.curry_capped`` (which defaults to ``True``) at the
    time `curry` is called::

        rest = lambda x, *more: (x, *more)
        assert curry(rest)(1, 2, 3) == (1,)
        assert curry(rest, capped=False)(1, 2, 3) == (1, 2, 3)

        withdefault = lambda x, y=7: (x, y)
        assert curry(withdefault)(1, 5) == (1, 7)  # y is beyond the arity
        assert curry(withdefault, capped=False)(1, 5) == (1, 5)

    Named arguments are accumulated and passed to `f` at the final call, but
    they never fill a positional slot, even when they name a positional
    parameter. To bind such a parameter by name, leave it out of the arity::

        pair = lambda x, y: (x, y)
        assert iscurried(curry(pair)(y=2)(1))  # still waiting for a second positional
        assert curry(pair, arity=1)(y=2)(1) == (1, 2)

    Nullary functions (or ``arity=0``) need no currying, so `f` itself is
    returned. Currying a curried function returns it unchanged.

    When called with only keyword arguments, return a decorator::

        @curry(capped=False)
        def f(x, *rest):
            ...

    Raises `InvalidArgumentError` if `f` is not callable, `InvalidArityError`
    if `arity` is not a non-negative integer, and `currypot.arity.UnknownArity`
    if `arity` was not given and `f` cannot be inspected.
    """
    if f is _unspecified:
        def decorator(f):
            return curry(f, arity=arity, capped=capped)
        return decorator
    if not callable(f):
        raise InvalidArgumentError("Expected a callable, got {}".format(repr(f)))
    # prevent stacking curried wrappers
    if iscurried(f):
        return f
    n = declared_arity(f) if arity is _unspecified else _resolve_arity(arity)
    if n == 0:
        return f
    return Curried(CurryState(f, n, _resolve_capped(capped), (), {}))

def curry_to(arity, f, capped=_unspecified):
    """Like `curry`, but arity first, and mandatory.

    Handy for functions with optional parameters::

        join = curry_to(2, lambda a, b, sep=", ": sep.join((a, b)))
    """
    return curry(f, arity=arity, capped=capped)

def curry_proto(f, *, arity=_unspecified, capped=_unspecified, this_arg_position=None):
    """Curry a method, taking the receiver (``self``) as a positional argument.

    By default the receiver comes *last*, so the method's other arguments can
    be given first, and the result applied to several objects::

        upper = curry_proto(str.upper)
        assert upper("foo") == "FOO"

        index = curry_proto(list.index, arity=2)
        whereis3 = index(3)
        assert whereis3([1, 2, 3]) == 2

        split = curry_proto(str.split, arity=2)
        assert split(",")("a,b") == ["a", "b"]

    `arity`: default is the number of required positional parameters of the
    method besides the receiver, plus one for the receiver. For an unbound
    method, ``self`` is part of the signature, so this is just its declared
    arity. Optional parameters are only reachable with an explicit `arity`.

    `this_arg_position`: index of the receiver among the positional arguments.
    Default ``arity - 1``. Must be in ``range(arity)``.

    `capped`: as for `curry`. When uncapped, extra arguments go to the method
    after the ones it got within the arity.

    `getsource` of the result gives the adapter function; its
    ``__wrapped__`` is `f`.
    """
    if not callable(f):
        raise InvalidArgumentError("Expected a callable, got {}".format(repr(f)))
    n = declared_arity(f) if arity is _unspecified else _resolve_arity(arity)
    position = n - 1 if this_arg_position is None else _resolve_arity(this_arg_position)
    if not 0 <= position < n:
        raise InvalidArityError("Receiver position {} out of range for arity {}".format(position, n))

    def adapter(*args, **kwargs):
        receiver = args[position]
        rest = args[:position] + args[position + 1:]
        return f(receiver, *rest, **kwargs)
    update_wrapper(adapter, f)
    return curry(adapter, arity=n, capped=capped)

def iscurried(f):
    """Return whether f is a curried function."""
    return isinstance(f, Curried)

def getsource(f):
    """Return the source (original, uncurried) function of f, or ``None`` if f is not curried."""
    if isinstance(f, Curried):
        return f.func
    return None
uncurry = getsource

def getarity(f):
    """Return the arity of f.

    For a curried function, the arity it was curried to. For any other
    callable, its declared arity, or zero if its signature cannot be
    inspected. For anything else, zero.
    """
    if isinstance(f, Curried):
        return f.arity
    if callable(f):
        try:
            return declared_arity(f)
        except UnknownArity:
            return 0
    return 0

# Shorthands, so that `from currypot import curry` is all you need.
curry.to = curry_to
curry.proto = curry_proto
curry._ = _
curry.__ = _
