import pytest

from bimultimap.errors import InvalidCapacityError
from bimultimap.grid import BucketGrid


def test_grid_create():
    grid = BucketGrid(3, 4)
    assert grid.shape == (3, 4)
    assert len(list(grid)) == 12
    assert len(grid) == 0


@pytest.mark.parametrize("rows, cols", [(0, 1), (1, 0), (2.0, 2), (True, 2), ("3", 3)])
def test_grid_invalid_dimensions(rows, cols):
    with pytest.raises(InvalidCapacityError) as e:
        BucketGrid(rows, cols)
    assert e.value.rows == rows
    assert e.value.cols == cols


def test_bucket_at_is_row_major():
    grid = BucketGrid(3, 4)
    grid.bucket_at(1, 2).add(("k", "v"))
    assert list(grid)[1 * 4 + 2] == {("k", "v")}
    assert grid.occupancy().count(1) == 1


def test_row_and_column_views():
    grid = BucketGrid(3, 4)
    for row in range(3):
        for col in range(4):
            grid.bucket_at(row, col).add((row, col))

    assert [next(iter(bucket)) for bucket in grid.row_view(1)] == [(1, 0), (1, 1), (1, 2), (1, 3)]
    assert [next(iter(bucket)) for bucket in grid.col_view(2)] == [(0, 2), (1, 2), (2, 2)]


def test_views_share_buckets():
    grid = BucketGrid(2, 2)
    grid.row_view(0)[1].add(("a", "b"))
    assert grid.bucket_at(0, 1) == {("a", "b")}
    assert grid.col_view(1)[0] is grid.bucket_at(0, 1)


def test_out_of_range_coordinates_are_programming_errors():
    grid = BucketGrid(2, 2)
    with pytest.raises(AssertionError):
        grid.bucket_at(2, 0)
    with pytest.raises(AssertionError):
        grid.col_view(5)


def test_clear():
    grid = BucketGrid(2, 2)
    grid.bucket_at(0, 0).add((1, 1))
    grid.bucket_at(1, 1).add((2, 2))
    assert len(grid) == 2
    grid.clear()
    assert len(grid) == 0
    assert grid.shape == (2, 2)
