# -*- coding: utf-8 -*-

import threading
from queue import Queue

import pytest

from ..dynassign import dyn, make_dynvar

def f():
    assert dyn.a == 2  # no a in lexical scope

def test_basic_usage():
    with dyn.let(a=2, b="foo"):
        assert dyn.a == 2
        f()

        with dyn.let(a=3):
            assert dyn.a == 3

        assert dyn.a == 2

    with pytest.raises(AttributeError):
        dyn.b  # no longer exists

def test_multithreading():
    comm = Queue()
    def threadtest(q):
        try:
            dyn.c  # just access dyn.c
        except AttributeError as err:
            q.put(err)
        q.put(None)

    with dyn.let(c=42):
        t1 = threading.Thread(target=threadtest, args=(comm,))
        t1.start()
        t1.join()
    assert comm.get() is None  # inherited the main thread's stack

    t2 = threading.Thread(target=threadtest, args=(comm,))
    t2.start()  # dyn.c no longer exists in the main thread
    t2.join()
    assert isinstance(comm.get(), AttributeError)

def test_make_dynvar():
    make_dynvar(im_always_there=True)
    with dyn.let(a=1, b=2):
        assert dyn.im_always_there is True
    assert dyn.im_always_there is True
    with dyn.let(im_always_there=False):
        assert dyn.im_always_there is False
    assert dyn.im_always_there is True

def test_scope_is_restored_on_error():
    with pytest.raises(RuntimeError):
        with dyn.let(a=1):
            raise RuntimeError("boom")
    with pytest.raises(AttributeError):
        dyn.a

def test_curry_capped_default():
    assert dyn.curry_capped is True  # default set by currypot.fun
    with dyn.let(curry_capped=False):
        assert dyn.curry_capped is False
    assert dyn.curry_capped is True
