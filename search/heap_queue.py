import heapq
import random


class HeapQueue:
    """
    Binary min-heap of payloads keyed by a numeric priority.

    Equal priorities are ordered by a random key, payloads themselves are
    never compared.
    """

    def __init__(self):
        self._heap = []

    def push(self, priority, payload):
        heapq.heappush(self._heap, (priority, random.random(), payload))

    def pop_min(self):
        if not self._heap:
            return None
        _, _, payload = heapq.heappop(self._heap)
        return payload

    def size(self):
        return len(self._heap)

    def __len__(self):
        return len(self._heap)
