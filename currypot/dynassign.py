# -*- coding: utf-8 -*-
"""Dynamic scope for the settings of the curry engine.

A setting bound with ``dyn.let`` is seen by everything that runs during the
``with`` block, including code in other modules, and by nothing else::

    from currypot import curry, dyn

    with dyn.let(curry_capped=False):
        f = curry(lambda x, *rest: (x, *rest))
    assert f(1, 2, 3) == (1, 2, 3)

The only setting currently defined is ``curry_capped`` (default ``True``),
read by `curry` when it is not given `capped` explicitly.
"""

__all__ = ["dyn", "make_dynvar"]

from contextlib import contextmanager
import threading

_defaults = {}

# Each thread has its own stack of scopes. A thread other than the main one
# starts from a snapshot of the main thread's stack, taken at its first access.
_local = threading.local()
_mainthread_scopes = []
_mainthread_lock = threading.Lock()

def _scopes():
    if threading.current_thread() is threading.main_thread():
        return _mainthread_scopes
    try:
        return _local.scopes
    except AttributeError:
        with _mainthread_lock:
            _local.scopes = list(_mainthread_scopes)
        return _local.scopes

class _Dyn:
    """Read access to dynamic settings. The only instance is ``dyn``.

    ``dyn.name`` gives the value from the innermost ``dyn.let`` binding
    ``name``, falling back to the default set by `make_dynvar`.
    """
    def __getattr__(self, name):
        for scope in reversed(_scopes()):
            if name in scope:
                return scope[name]
        try:
            return _defaults[name]
        except KeyError:
            raise AttributeError("dynamic variable {} is not defined".format(repr(name))) from None

    @contextmanager
    def let(self, **bindings):
        """Bind settings for the dynamic extent of a ``with`` block. Blocks nest."""
        scopes = _scopes()
        if threading.current_thread() is threading.main_thread():
            with _mainthread_lock:  # a new thread may be copying the stack right now
                scopes.append(bindings)
        else:
            scopes.append(bindings)
        try:
            yield
        finally:
            scopes.pop()
dyn = _Dyn()

def make_dynvar(**bindings):
    """Set the defaults of dynamic settings, seen outside of any ``dyn.let``."""
    _defaults.update(bindings)
