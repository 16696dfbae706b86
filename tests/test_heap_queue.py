from search.heap_queue import HeapQueue


def test_pops_in_priority_order():
    queue = HeapQueue()
    for priority in [5, 1, 3]:
        queue.push(priority, f"p{priority}")
    assert queue.size() == 3
    assert [queue.pop_min() for _ in range(3)] == ["p1", "p3", "p5"]
    assert queue.size() == 0


def test_pop_from_empty_queue():
    queue = HeapQueue()
    assert queue.pop_min() is None
    assert len(queue) == 0


def test_equal_priorities_never_compare_payloads():
    queue = HeapQueue()
    payloads = [{"answer": [i]} for i in range(20)]
    for payload in payloads:
        queue.push(1.5, payload)
    queue.push(0.5, {"answer": "first"})
    assert queue.pop_min() == {"answer": "first"}
    popped = [queue.pop_min() for _ in range(20)]
    assert sorted(p["answer"][0] for p in popped) == list(range(20))


def test_interleaved_push_and_pop():
    queue = HeapQueue()
    queue.push(4.0, "a")
    queue.push(2.0, "b")
    assert queue.pop_min() == "b"
    queue.push(1.0, "c")
    queue.push(3.0, "d")
    assert [queue.pop_min(), queue.pop_min(), queue.pop_min()] == ["c", "d", "a"]
