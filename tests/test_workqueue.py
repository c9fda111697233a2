import threading

import pytest

from sftpkit.workqueue import WorkQueue


def test_all_jobs_processed():
    results = []
    lock = threading.Lock()

    def worker(job, data):
        with lock:
            results.append(job * 2)

    with WorkQueue(worker, 3) as q:
        for n in range(50):
            q.add(n)
    assert sorted(results) == [n * 2 for n in range(50)]


def test_single_thread_preserves_order():
    results = []
    q = WorkQueue(lambda job, data: results.append(job), 1)
    for n in range(20):
        q.add(n)
    q.close()
    assert results == list(range(20))


def test_init_and_cleanup_per_thread():
    created = []
    cleaned = []
    seen = []
    lock = threading.Lock()

    def init():
        with lock:
            token = object()
            created.append(token)
            return token

    def cleanup(data):
        with lock:
            cleaned.append(data)

    def worker(job, data):
        with lock:
            seen.append(data)

    q = WorkQueue(worker, 4, init, cleanup)
    with q as entered:
        assert entered is q
        for n in range(10):
            entered.add(n)
    assert len(created) == 4
    assert set(map(id, cleaned)) == set(map(id, created))
    assert all(any(d is c for c in created) for d in seen)
    assert len(seen) == 10


def test_close_runs_pending_jobs():
    gate = threading.Event()
    results = []

    def worker(job, data):
        gate.wait(5)
        results.append(job)

    q = WorkQueue(worker, 1)
    with q as entered:
        assert entered is q
        for n in range(5):
            entered.add(n)
        gate.set()
    assert results == [0, 1, 2, 3, 4]


def test_add_after_close_raises():
    q = WorkQueue(lambda job, data: None, 2)
    q.close()
    with pytest.raises(RuntimeError):
        q.add(1)


def test_zero_threads_rejected():
    with pytest.raises(ValueError):
        WorkQueue(lambda job, data: None, 0)


def test_close_is_idempotent():
    results = []
    q = WorkQueue(lambda job, data: results.append(job), 1)
    q.add("a")
    q.close()
    q.close()
    assert results == ["a"]