import logging

from contextlib import contextmanager
from time import time

logger = logging.getLogger(__name__)


class Timer:
    """
    Wall-clock durations of named phases, in seconds.
    """
    def __init__(self):
        self.times: dict[str, float] = {}

    @contextmanager
    def phase(self, name: str):
        t0 = time()
        try:
            yield
        finally:
            self.times[name] = time() - t0
            logger.info("%s: %.3f sec", name, self.times[name])

    @property
    def total(self) -> float:
        return sum(self.times.values())
