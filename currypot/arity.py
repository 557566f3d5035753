# -*- coding: utf-8 -*-
"""Inspect the arity of a callable.

This module uses ``inspect`` out of necessity. The curry engine needs the
number of positional arguments a function *requires*, which is what
JavaScript calls ``Function.length``; see `declared_arity`.
"""

__all__ = ["getfunc", "declared_arity", "UnknownArity"]

from inspect import signature, Parameter, ismethod

class UnknownArity(ValueError):
    """Raised when the arity of a function cannot be inspected."""

_poskinds = (Parameter.POSITIONAL_ONLY, Parameter.POSITIONAL_OR_KEYWORD)

def getfunc(f):
    """Given a function or method, return the underlying function.

    Return value is a tuple ``(function, kind)``, where ``kind`` is one of
    "function", "instancemethod", "classmethod", "staticmethod".

    Note `inspect.ismethod()` only recognizes *bound* methods, so an instance
    method accessed through the class (``A.meth``) is a plain "function",
    whose first parameter is ``self``.
    """
    if ismethod(f):
        # Classes are instances of `type`.
        if isinstance(f.__self__, type):
            kind = "classmethod"
        else:
            kind = "instancemethod"
        return (f.__func__, kind)
    if isinstance(f, staticmethod):
        return (f.__func__, "staticmethod")
    if isinstance(f, classmethod):
        return (f.__func__, "classmethod")
    return (f, "function")

def _positional_parameters(f):
    f, kind = getfunc(f)
    try:
        params = list(signature(f).parameters.values())
    except (TypeError, ValueError) as err:  # likely an uninspectable builtin
        raise UnknownArity(*err.args) from err
    if kind in ("instancemethod", "classmethod") and params:  # self/cls is passed implicitly
        params = params[1:]
    return params

def declared_arity(f):
    """Return the number of leading positional parameters of f without a default.

    Counting stops at the first parameter that has a default, and at ``*args``.
    Keyword-only parameters never count. This is the arity `curry` uses when
    none is given explicitly::

        declared_arity(lambda a, b: ...)          # --> 2
        declared_arity(lambda a, b=7: ...)        # --> 1
        declared_arity(lambda a, *rest: ...)      # --> 1
        declared_arity(lambda a, *, key: ...)     # --> 1

    A required parameter that comes after a defaulted one
    (only possible for some builtins) is not counted.

    Raises `UnknownArity` if inspection failed.
    """
    n = 0
    for p in _positional_parameters(f):
        if p.kind not in _poskinds or p.default is not Parameter.empty:
            break
        n += 1
    return n
