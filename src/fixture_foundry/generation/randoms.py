"""Process-wide random source safe for concurrent test execution.

Every thread draws from its own ``random.Random``. Seeds are derived from one
process seed plus a per-thread sequence number, so a seeded run is reproducible
as long as threads are started in the same order.
"""

from __future__ import annotations

import itertools
import random
import threading

_LOCK = threading.Lock()
_LOCAL = threading.local()
_process_seed: int | None = None
_generation = 0
_thread_sequence = itertools.count()


def set_seed(seed: int | None) -> None:
    """Reseed the process-wide source; ``None`` falls back to OS entropy."""
    global _process_seed, _generation, _thread_sequence
    with _LOCK:
        _process_seed = seed
        _generation += 1
        _thread_sequence = itertools.count()


def get_seed() -> int | None:
    with _LOCK:
        return _process_seed


def current_random() -> random.Random:
    """Return the calling thread's generator, creating it on first use."""
    generation = getattr(_LOCAL, "generation", None)
    rng: random.Random | None = getattr(_LOCAL, "rng", None)
    with _LOCK:
        current_generation = _generation
        if rng is not None and generation == current_generation:
            return rng
        seed = _process_seed
        sequence = next(_thread_sequence)
    rng = random.Random(None if seed is None else f"{seed}:{sequence}")
    _LOCAL.rng = rng
    _LOCAL.generation = current_generation
    return rng


def next_int(lower: int, upper: int) -> int:
    """Uniform integer in ``[lower, upper]`` inclusive."""
    if lower > upper:
        raise ValueError(f"lower ({lower}) must not exceed upper ({upper})")
    return current_random().randint(lower, upper)


__all__ = ["current_random", "get_seed", "next_int", "set_seed"]
