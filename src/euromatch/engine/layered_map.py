"""LayeredMap — one key → set mapping per depth.

Used by the donor index to hold the same values under progressively longer
key tuples. `add` creates the bucket on first use; `freeze` turns every
bucket into a frozenset and makes the map read-only.
"""

from collections.abc import Hashable, Iterator
from typing import Generic, TypeVar

K = TypeVar("K", bound=Hashable)
V = TypeVar("V", bound=Hashable)


class LayeredMap(Generic[K, V]):
    """Fixed number of layers, each mapping a key to a set of values."""

    def __init__(self, depths: int) -> None:
        if depths <= 0:
            msg = f"depths must be positive, got {depths}."
            raise ValueError(msg)
        self._layers: list[dict[K, set[V] | frozenset[V]]] = [{} for _ in range(depths)]
        self._frozen = False

    @property
    def depths(self) -> int:
        return len(self._layers)

    @property
    def frozen(self) -> bool:
        return self._frozen

    def _layer(self, depth: int) -> dict[K, set[V] | frozenset[V]]:
        if not 0 <= depth < len(self._layers):
            msg = f"depth must be between 0 and {len(self._layers) - 1}, got {depth}."
            raise ValueError(msg)
        return self._layers[depth]

    def add(self, depth: int, key: K, value: V) -> None:
        """Insert `value` into the bucket for `key` at `depth`, creating it if needed."""
        if self._frozen:
            raise RuntimeError("LayeredMap is frozen; no further insertions allowed.")
        self._layer(depth).setdefault(key, set()).add(value)

    def get(self, depth: int, key: K) -> frozenset[V]:
        """Bucket for `key` at `depth`; empty when there is none."""
        return frozenset(self._layer(depth).get(key, ()))

    def keys(self, depth: int) -> Iterator[K]:
        return iter(self._layer(depth))

    def bucket_count(self, depth: int) -> int:
        return len(self._layer(depth))

    def freeze(self) -> None:
        for layer in self._layers:
            for key, bucket in layer.items():
                layer[key] = frozenset(bucket)
        self._frozen = True
