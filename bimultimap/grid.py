from __future__ import annotations

from collections.abc import Iterator, Sequence
from typing import Generic, TypeVar

from bimultimap.errors import InvalidCapacityError

KeyType = TypeVar("KeyType")
ValueType = TypeVar("ValueType")

Relation = tuple[KeyType, ValueType]
Bucket = set[Relation[KeyType, ValueType]]


def _is_dimension(value: object) -> bool:
    return isinstance(value, int) and not isinstance(value, bool) and value >= 1


class BucketGrid(Generic[KeyType, ValueType]):
    """Fixed rows x cols matrix of buckets stored in one flat list.

    The bucket at (row, col) lives at index ``row * cols + col``, so a row is a contiguous slice and a column is a
    strided one.
    """

    __slots__ = ("_buckets", "_cols", "_rows")

    def __init__(self, rows: int, cols: int) -> None:
        if not (_is_dimension(rows) and _is_dimension(cols)):
            raise InvalidCapacityError(rows, cols)
        self._rows = rows
        self._cols = cols
        self._buckets: list[Bucket[KeyType, ValueType]] = [set() for _ in range(rows * cols)]

    @property
    def rows(self) -> int:
        return self._rows

    @property
    def cols(self) -> int:
        return self._cols

    @property
    def shape(self) -> tuple[int, int]:
        return self._rows, self._cols

    def bucket_at(self, row: int, col: int) -> Bucket[KeyType, ValueType]:
        assert 0 <= row < self._rows and 0 <= col < self._cols, f"({row}, {col}) outside grid {self.shape}"
        return self._buckets[row * self._cols + col]

    def row_view(self, row: int) -> Sequence[Bucket[KeyType, ValueType]]:
        assert 0 <= row < self._rows, f"row {row} outside grid {self.shape}"
        start = row * self._cols
        return self._buckets[start : start + self._cols]

    def col_view(self, col: int) -> Sequence[Bucket[KeyType, ValueType]]:
        assert 0 <= col < self._cols, f"column {col} outside grid {self.shape}"
        return self._buckets[col :: self._cols]

    def occupancy(self) -> list[int]:
        return [len(bucket) for bucket in self._buckets]

    def clear(self) -> None:
        for bucket in self._buckets:
            bucket.clear()

    def __iter__(self) -> Iterator[Bucket[KeyType, ValueType]]:
        return iter(self._buckets)

    def __len__(self) -> int:
        return sum(self.occupancy())
