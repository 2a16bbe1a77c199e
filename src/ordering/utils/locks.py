"""Per-customer serialization of cart mutations and checkout.

Cart updates are read-modify-write on a single document, so two requests for
the same customer must not interleave. Requests for different customers never
contend. A customer's lock lives only while some request holds or waits on it.
"""

import threading
from contextlib import contextmanager

# customer id -> [lock, number of holders and waiters]
_locks: dict[str, list] = {}
_registry_lock = threading.Lock()


def _acquire_entry(customer_id: str) -> threading.Lock:
    with _registry_lock:
        entry = _locks.setdefault(str(customer_id), [threading.Lock(), 0])
        entry[1] += 1
        return entry[0]


def _release_entry(customer_id: str) -> None:
    with _registry_lock:
        entry = _locks[str(customer_id)]
        entry[1] -= 1
        if entry[1] == 0:
            del _locks[str(customer_id)]


@contextmanager
def customer_lock(customer_id: str):
    """Hold the customer's cart lock for the duration of the block."""
    lock = _acquire_entry(customer_id)
    try:
        with lock:
            yield
    finally:
        _release_entry(customer_id)
