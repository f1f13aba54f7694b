import threading
from collections import Counter

from gotway.loadbalancer import RoundRobinBalancer
from gotway.service import ServiceInstance


def _three():
    return [
        ServiceInstance(id="instance-1", host="host1", port=8081),
        ServiceInstance(id="instance-2", host="host2", port=8082),
        ServiceInstance(id="instance-3", host="host3", port=8083),
    ]


def test_distributes_in_order():
    lb = RoundRobinBalancer()
    instances = _three()
    ids = [lb.select(instances).id for _ in range(4)]
    assert ids == ["instance-1", "instance-2", "instance-3", "instance-1"]


def test_empty_list():
    lb = RoundRobinBalancer()
    assert lb.select([]) is None
    assert lb.select(None) is None


def test_empty_list_does_not_advance():
    lb = RoundRobinBalancer()
    lb.select([])
    assert lb.select(_three()).id == "instance-1"


def test_single_instance():
    lb = RoundRobinBalancer()
    instances = [ServiceInstance(id="only-instance", host="host1", port=8081)]
    assert [lb.select(instances).id for _ in range(5)] == ["only-instance"] * 5


def test_concurrent_even_distribution():
    lb = RoundRobinBalancer()
    instances = _three()
    selected = []
    lock = threading.Lock()

    def worker():
        local = [lb.select(instances) for _ in range(30)]
        with lock:
            selected.extend(local)

    threads = [threading.Thread(target=worker) for _ in range(100)]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()

    counts = Counter(instance.id for instance in selected)
    assert len(selected) == 3000
    assert counts == {"instance-1": 1000, "instance-2": 1000, "instance-3": 1000}
    assert lb.select(instances).id == "instance-1"