# -*- coding: utf-8; -*-
"""Placeholders for partial application. Pickle-aware.

A placeholder marks an argument position that has not been supplied yet::

    from currypot import curry, _

    triple = curry(lambda a, b, c: (a, b, c))
    assert triple(_, 2)(1)(3) == (1, 2, 3)

Placeholders are recognized by object identity only, so they never collide
with user data (not even with ``None``).
"""

__all__ = ["Placeholder",
           "_", "__",
           "isplaceholder", "register_placeholder", "registered_placeholders"]

from weakref import WeakValueDictionary
import threading

_instances = WeakValueDictionary()  # name -> Placeholder
_instances_lock = threading.Lock()

class Placeholder:
    """A named hole in an argument list. One instance per name.

    ``Placeholder("x") is Placeholder("x")``, also across pickling, so a
    pickled partial application still has its holes when loaded back.
    Instances are immutable and compare by identity only.

    Creating a `Placeholder` does not make currying treat it as one; the
    canonical `_` is registered, any others go through `register_placeholder`.
    """
    __slots__ = ("name", "__weakref__")

    def __new__(cls, name):
        instance = _instances.get(name)
        if instance is not None:
            return instance
        with _instances_lock:
            instance = _instances.get(name)
            if instance is None:
                instance = super().__new__(cls)
                object.__setattr__(instance, "name", name)
                _instances[name] = instance
        return instance

    def __setattr__(self, name, value):
        raise AttributeError("placeholders are immutable")
    def __delattr__(self, name):
        raise AttributeError("placeholders are immutable")

    def __reduce__(self):
        return (Placeholder, (self.name,))

    def __repr__(self):
        return "Placeholder({})".format(repr(self.name))

_ = Placeholder("_")
__ = _

# Registered placeholders, in registration order. Append-only; the tuple is
# replaced as a whole so that readers never need the lock.
_registry = (_,)
_registry_lock = threading.Lock()

def isplaceholder(value):
    """Return whether `value` is the canonical or a registered placeholder."""
    if value is _:
        return True
    for p in _registry:
        if value is p:
            return True
    return False

def register_placeholder(value):
    """Recognize `value` as a placeholder, process-wide, from now on.

    Idempotent. There is no way to unregister. Return `value`, so this can be
    used inline::

        hole = register_placeholder(Placeholder("hole"))

    Any object can be registered, but it is then a placeholder *everywhere*,
    so registering something like ``None`` is a bad idea.
    """
    global _registry
    with _registry_lock:
        if not isplaceholder(value):
            _registry = _registry + (value,)
    return value

def registered_placeholders():
    """Return a tuple of all recognized placeholders, in registration order."""
    return _registry
