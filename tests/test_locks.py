import threading

from app.core.locks import ReadWriteLock


def test_readers_share_the_lock():
    lock = ReadWriteLock()
    both_inside = threading.Barrier(2, timeout=5)

    def reader():
        with lock.read():
            both_inside.wait()

    threads = [threading.Thread(target=reader) for _ in range(2)]
    for t in threads:
        t.start()
    for t in threads:
        t.join(timeout=5)

    assert not both_inside.broken


def test_writer_excludes_readers():
    lock = ReadWriteLock()
    order = []
    reader_started = threading.Event()

    lock.acquire_write()

    def reader():
        reader_started.set()
        with lock.read():
            order.append("read")

    t = threading.Thread(target=reader)
    t.start()
    reader_started.wait(timeout=5)
    order.append("write")
    lock.release_write()
    t.join(timeout=5)

    assert order == ["write", "read"]
