# -*- coding: utf-8; -*-

import pickle
import threading
from queue import Queue

import pytest

from ..placeholder import (Placeholder, _, __,
                           isplaceholder, register_placeholder, registered_placeholders)

def test_interning():
    assert Placeholder("foo") is Placeholder("foo")
    assert Placeholder("foo") is not Placeholder("bar")

    # Works even if pickled.
    foo = Placeholder("foo")
    o = pickle.loads(pickle.dumps(foo))
    assert o is foo

    # repr() gives the source code to re-create it.
    assert repr(foo) == "Placeholder('foo')"
    assert eval(repr(foo)) is foo

def test_immutable():
    foo = Placeholder("foo")
    with pytest.raises(AttributeError):
        foo.name = "bar"
    with pytest.raises(AttributeError):
        del foo.name
    with pytest.raises(AttributeError):
        foo.other = 42  # no instance dict
    assert foo.name == "foo"

def test_interning_is_threadsafe():
    comm = Queue()
    def worker():
        for _i in range(100):
            comm.put(Placeholder("shared-between-threads"))
    threads = [threading.Thread(target=worker) for _i in range(4)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()
    instances = []
    while not comm.empty():
        instances.append(comm.get())
    assert len(instances) == 400
    assert all(x is instances[0] for x in instances)

def test_canonical_placeholder():
    assert __ is _
    assert _ is Placeholder("_")
    assert isplaceholder(_)
    assert isplaceholder(__)
    assert registered_placeholders()[0] is _

    # identity only; nothing else is a placeholder by default
    assert not isplaceholder(None)
    assert not isplaceholder(0)
    assert not isplaceholder("_")
    assert not isplaceholder(Placeholder("not registered"))

    # survives pickling, so a pickled partial application stays partial
    assert pickle.loads(pickle.dumps(_)) is _

def test_register_placeholder():
    hole = Placeholder("test_register_placeholder.hole")
    assert not isplaceholder(hole)
    assert register_placeholder(hole) is hole
    assert isplaceholder(hole)

    before = registered_placeholders()
    register_placeholder(hole)  # idempotent
    assert registered_placeholders() == before
    assert registered_placeholders()[-1] is hole

    # append order is preserved
    gap = register_placeholder(Placeholder("test_register_placeholder.gap"))
    assert registered_placeholders()[-2:] == (hole, gap)

    # any object will do
    marker = register_placeholder(object())
    assert isplaceholder(marker)

def test_register_placeholder_from_many_threads():
    holes = [Placeholder("threaded.{}".format(k)) for k in range(20)]
    def worker():
        for h in holes:
            register_placeholder(h)
    threads = [threading.Thread(target=worker) for _i in range(4)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()
    registered = registered_placeholders()
    assert all(isplaceholder(h) for h in holes)
    assert all(sum(1 for r in registered if r is h) == 1 for h in holes)  # no duplicates
