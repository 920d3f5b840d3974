import pytest

from pcb_scheduler.ready_queue import QueueEmpty, ReadyQueue


def test_dequeue_follows_enqueue_order_not_pid_value():
    q = ReadyQueue([30, 10, 20])
    assert [q.dequeue_next() for _ in range(3)] == [30, 10, 20]


def test_requeue_goes_to_tail():
    q = ReadyQueue([1, 2, 3])
    head = q.dequeue_next()
    q.enqueue(head)
    assert list(q) == [2, 3, 1]


def test_dequeue_on_empty_raises_queue_empty():
    q = ReadyQueue()
    assert not q
    assert len(q) == 0
    with pytest.raises(QueueEmpty):
        q.dequeue_next()


def test_same_pid_cannot_be_queued_twice_at_once():
    q = ReadyQueue([5])
    with pytest.raises(ValueError):
        q.enqueue(5)

    # Once dispatched it may come back.
    q.dequeue_next()
    q.enqueue(5)
    assert 5 in q


def test_iteration_does_not_consume():
    q = ReadyQueue([2, 1])
    assert list(q) == [2, 1]
    assert len(q) == 2


def test_membership_tracks_enqueue_and_dequeue():
    q = ReadyQueue([1, 2])
    assert 1 in q and 2 in q

    assert q.dequeue_next() == 1
    assert 1 not in q
    assert 2 in q

    q.enqueue(1)
    assert list(q) == [2, 1]
    with pytest.raises(ValueError):
        q.enqueue(2)


def test_large_initial_queue_keeps_fifo_order():
    n = 200_000
    q = ReadyQueue(range(n))

    assert len(q) == n
    assert (n - 1) in q
    assert q.dequeue_next() == 0
    q.enqueue(0)
    assert 0 in q
    assert list(q)[-1] == 0
