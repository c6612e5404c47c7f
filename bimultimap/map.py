from __future__ import annotations

import logging
from collections.abc import Callable, Hashable, Iterable, Iterator, Sequence
from dataclasses import dataclass
from operator import itemgetter
from typing import Generic, TypeVar

from bimultimap.configurations import GridConfigurations
from bimultimap.errors import ConcurrentModificationError
from bimultimap.grid import Bucket, BucketGrid
from bimultimap.hashing import HashProvider, RandomStateHashProvider, digest_to_index

logger = logging.getLogger(__name__)

KeyType = TypeVar("KeyType", bound=Hashable)
ValueType = TypeVar("ValueType", bound=Hashable)
T = TypeVar("T")


@dataclass(frozen=True)
class GridStats:
    relations: int
    buckets: int
    empty_buckets: int
    max_bucket_size: int

    @property
    def load_factor(self) -> float:
        return self.relations / self.buckets


class BiMultiMap(Generic[KeyType, ValueType]):
    """A bidirectional multimap.

    Every key may relate to many values and every value to many keys. Relations are kept in a fixed 2D grid of
    buckets: the pair ``(key, value)`` goes to ``grid[digest(key) % rows][digest(value) % cols]``, and each bucket is
    a set, so colliding relations are told apart by plain equality.

    Looking up the values of a key scans one row of the grid, looking up the keys of a value scans one column. The
    column scan strides over the underlying flat array and is expected to be slower than the row scan.

    Iterators returned by :meth:`key_iter`, :meth:`val_iter` and :meth:`iter` are live views. Once the map is
    modified they raise :class:`ConcurrentModificationError` on the next step.
    """

    def __init__(self, rows: int, cols: int, hash_provider: HashProvider | None = None) -> None:
        self._grid: BucketGrid[KeyType, ValueType] = BucketGrid(rows, cols)
        self._hash_provider = hash_provider if hash_provider is not None else RandomStateHashProvider()
        self._version = 0
        self._length = 0
        logger.debug(f"created {rows}x{cols} bucket grid with {type(self._hash_provider).__name__}")

    @classmethod
    def with_hasher(cls, rows: int, cols: int, hash_provider: HashProvider) -> BiMultiMap[KeyType, ValueType]:
        return cls(rows, cols, hash_provider)

    @classmethod
    def from_configurations(cls, configurations: GridConfigurations) -> BiMultiMap[KeyType, ValueType]:
        return cls(configurations.rows, configurations.cols, configurations.hash_provider())

    @property
    def rows(self) -> int:
        return self._grid.rows

    @property
    def cols(self) -> int:
        return self._grid.cols

    @property
    def hash_provider(self) -> HashProvider:
        return self._hash_provider

    def _row_of(self, key: KeyType) -> int:
        return digest_to_index(self._hash_provider.digest(key), self._grid.rows)

    def _col_of(self, value: ValueType) -> int:
        return digest_to_index(self._hash_provider.digest(value), self._grid.cols)

    def _bucket(self, key: KeyType, value: ValueType) -> Bucket[KeyType, ValueType]:
        return self._grid.bucket_at(self._row_of(key), self._col_of(value))

    def _check_version(self, version: int) -> None:
        if version != self._version:
            raise ConcurrentModificationError()

    def _scan(
        self,
        buckets: Sequence[Bucket[KeyType, ValueType]] | BucketGrid[KeyType, ValueType],
        matches: Callable[[tuple[KeyType, ValueType]], bool],
        project: Callable[[tuple[KeyType, ValueType]], T],
        version: int,
    ) -> Iterator[T]:
        for bucket in buckets:
            self._check_version(version)
            for relation in bucket:
                if not matches(relation):
                    continue
                yield project(relation)
                self._check_version(version)

    def insert(self, key: KeyType, value: ValueType) -> bool:
        bucket = self._bucket(key, value)
        relation = (key, value)
        if relation in bucket:
            return False
        bucket.add(relation)
        self._version += 1
        self._length += 1
        return True

    def update(self, relations: Iterable[tuple[KeyType, ValueType]]) -> int:
        return sum(self.insert(key, value) for key, value in relations)

    def remove(self, relation: tuple[KeyType, ValueType]) -> bool:
        key, value = relation
        relation = (key, value)
        bucket = self._bucket(key, value)
        if relation not in bucket:
            return False
        bucket.remove(relation)
        self._version += 1
        self._length -= 1
        return True

    def remove_key(self, key: KeyType) -> int:
        values = list(self.key_iter(key))
        for value in values:
            self.remove((key, value))
        logger.debug(f"removed {len(values)} relations of key {key!r}")
        return len(values)

    def remove_value(self, value: ValueType) -> int:
        keys = list(self.val_iter(value))
        for key in keys:
            self.remove((key, value))
        logger.debug(f"removed {len(keys)} relations of value {value!r}")
        return len(keys)

    def clear(self) -> None:
        self._grid.clear()
        self._version += 1
        self._length = 0
        logger.debug("cleared all relations")

    def key_iter(self, key: KeyType) -> Iterator[ValueType]:
        """Yields every value related to ``key``, in no particular order."""
        row = self._grid.row_view(self._row_of(key))
        return self._scan(row, lambda relation: relation[0] == key, itemgetter(1), self._version)

    def val_iter(self, value: ValueType) -> Iterator[KeyType]:
        """Yields every key related to ``value``, in no particular order."""
        col = self._grid.col_view(self._col_of(value))
        return self._scan(col, lambda relation: relation[1] == value, itemgetter(0), self._version)

    def iter(self) -> Iterator[tuple[KeyType, ValueType]]:
        return self._scan(self._grid, lambda _: True, lambda relation: relation, self._version)

    def count_values(self, key: KeyType) -> int:
        return sum(1 for _ in self.key_iter(key))

    def count_keys(self, value: ValueType) -> int:
        return sum(1 for _ in self.val_iter(value))

    def stats(self) -> GridStats:
        occupancy = self._grid.occupancy()
        return GridStats(
            relations=sum(occupancy),
            buckets=len(occupancy),
            empty_buckets=occupancy.count(0),
            max_bucket_size=max(occupancy),
        )

    def __iter__(self) -> Iterator[tuple[KeyType, ValueType]]:
        return self.iter()

    def __len__(self) -> int:
        return self._length

    def __contains__(self, relation: object) -> bool:
        if not isinstance(relation, tuple) or len(relation) != 2:  # noqa: PLR2004
            return False
        key, value = relation
        return relation in self._bucket(key, value)

    def __repr__(self) -> str:
        entries = ", ".join(f"{key!r}: {value!r}" for key, value in self.iter())
        return f"{type(self).__name__}({{{entries}}})"
