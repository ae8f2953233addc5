"""Generation-time helpers: random source and container size sampling."""

from fixture_foundry.generation.containers import ContainerSizeInfo, sample_container_size
from fixture_foundry.generation.randoms import current_random, get_seed, next_int, set_seed

__all__ = [
    "ContainerSizeInfo",
    "current_random",
    "get_seed",
    "next_int",
    "sample_container_size",
    "set_seed",
]
