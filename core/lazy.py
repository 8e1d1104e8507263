from itertools import chain
from typing import Iterable, Iterator, Mapping, Sequence, TypeVar

K = TypeVar("K")
V = TypeVar("V")


def iter_buckets(
    buckets: Mapping[K, Sequence[V]], keys: Iterable[K]
) -> Iterator[V]:
    """Flatten the buckets named by ``keys``, in key order then bucket order."""
    return chain.from_iterable(tuple(buckets.get(k, ())) for k in tuple(keys))


def iter_items(totals: Mapping[K, V], keys: Iterable[K]) -> Iterator[tuple[K, V]]:
    for k in tuple(keys):
        yield k, totals[k]
