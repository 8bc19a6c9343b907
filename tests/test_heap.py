import pytest

from rlgsim.core.heap import MinHeap


def test_pops_in_key_order_regardless_of_push_order():
    h = MinHeap(key=lambda x: x)
    for v in [7, 3, 9, 1, 5]:
        h.push(v)
    assert [h.pop() for _ in range(5)] == [1, 3, 5, 7, 9]
    assert h.is_empty()


def test_items_are_never_compared_directly():
    # dicts are unorderable; equal keys must not fall through to comparing them
    h = MinHeap(key=lambda d: d["k"])
    h.push({"k": 2, "name": "a"})
    h.push({"k": 2, "name": "b"})
    h.push({"k": 1, "name": "c"})
    assert h.pop()["name"] == "c"
    assert {h.pop()["name"], h.pop()["name"]} == {"a", "b"}


def test_empty_heap_raises_on_pop_and_peek():
    h = MinHeap(key=lambda x: x)
    assert not h
    with pytest.raises(IndexError):
        h.pop()
    with pytest.raises(IndexError):
        h.peek()


def test_peek_len_and_clear():
    h = MinHeap(key=lambda x: -x)
    h.push(1)
    h.push(4)
    assert h.peek() == 4
    assert len(h) == 2
    assert [h.pop(), h.pop()] == [4, 1]
    h.push(2)
    h.clear()
    assert len(h) == 0
