import threading
import time

import pytest

from umi_inspector.pipeline.emitter import EmissionCancelled, EmissionQueue, run_producer


def test_items_then_close():
    q = EmissionQueue(capacity=4)
    q.put(1)
    q.put(2)
    q.close()
    assert list(q) == [1, 2]


def test_fail_is_reraised_for_consumer():
    q = EmissionQueue(capacity=4)
    q.put("a")
    q.fail(ValueError("broken record"))
    it = iter(q)
    assert next(it) == "a"
    with pytest.raises(ValueError):
        next(it)


def test_full_queue_applies_backpressure():
    q = EmissionQueue(capacity=1)
    produced = []

    def produce():
        for i in range(3):
            produced.append(i)
            yield i

    t = run_producer(produce, q)
    time.sleep(0.3)
    # one item queued, the producer holds the next one and waits
    assert produced == [0, 1]
    assert t.is_alive()

    assert list(q) == [0, 1, 2]
    t.join(timeout=2)
    assert not t.is_alive()


def test_cancel_releases_blocked_producer():
    q = EmissionQueue(capacity=1)
    q.put(0)
    done = threading.Event()

    def blocked():
        with pytest.raises(EmissionCancelled):
            q.put(1)
        done.set()

    t = threading.Thread(target=blocked, daemon=True)
    t.start()
    q.cancel()
    t.join(timeout=2)
    assert done.is_set()


def test_producer_error_reaches_consumer():
    def produce():
        yield 1
        raise RuntimeError("source failed")

    q = EmissionQueue(capacity=8)
    run_producer(produce, q)
    got = []
    with pytest.raises(RuntimeError):
        for item in q:
            got.append(item)
    assert got == [1]
