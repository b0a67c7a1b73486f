"""Square grid over a flat row-major buffer.

Index ``i`` maps to row ``i // size`` and column ``i % size``. The buffer is a
1-D numpy array so grids can be compared, summed and masked cheaply while the
walking algorithms keep addressing cells by flat index.
"""

from __future__ import annotations

from collections.abc import Iterable

import numpy as np
from numpy.typing import DTypeLike, NDArray


class Grid:
    """A ``size`` x ``size`` matrix stored as ``size * size`` flat cells."""

    __slots__ = ("size", "data")

    def __init__(self, size: int, data: NDArray) -> None:
        self.size = size
        self.data = data

    @classmethod
    def new(cls, size: int, dtype: DTypeLike = np.uint32) -> Grid:
        """Grid with an empty buffer, to be filled by the caller."""
        return cls(size, np.empty(0, dtype=dtype))

    @classmethod
    def initialize(cls, size: int, initial_value: int | float = 0, dtype: DTypeLike = np.uint32) -> Grid:
        """Grid with every cell set to ``initial_value``."""
        return cls(size, np.full(size * size, initial_value, dtype=dtype))

    @classmethod
    def build(cls, size: int, values: Iterable[int] | NDArray, dtype: DTypeLike = np.uint32) -> Grid:
        """Grid over a copy of existing flat data.

        Raises ValueError if the data does not hold exactly ``size * size`` cells.
        """
        data = np.array(list(values) if not isinstance(values, np.ndarray) else values, dtype=dtype).ravel()
        if data.size != size * size:
            raise ValueError(
                f"Grid of size {size} needs {size * size} cells, got {data.size}"
            )
        return cls(size, data)

    def __len__(self) -> int:
        return int(self.data.size)

    def __getitem__(self, index: int):
        return self.data[index]

    def __setitem__(self, index: int, value) -> None:
        self.data[index] = value

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Grid):
            return NotImplemented
        return self.size == other.size and np.array_equal(self.data, other.data)

    def __repr__(self) -> str:
        return f"Grid(size={self.size}, filled={self.count_nonzero()})"

    def as_matrix(self) -> NDArray:
        """2-D view of the buffer (shares memory)."""
        return self.data.reshape(self.size, self.size)

    def transpose(self) -> None:
        """Rearrange the data in place so columns are read as rows."""
        self.data = np.ascontiguousarray(self.as_matrix().T).ravel()

    def normal_copy(self) -> Grid:
        return Grid(self.size, self.data.copy())

    def transposed_copy(self) -> Grid:
        result = self.normal_copy()
        result.transpose()
        return result

    def test_index(self, index: int) -> bool:
        """True if ``index`` addresses a cell of the buffer.

        This is a buffer check only: an index that wrapped around a row edge
        still passes.
        """
        return 0 <= index < self.data.size

    def test_border_index(self, index: int) -> bool:
        """True if ``index`` lies on the outermost ring of rows and columns.

        Indexes outside the buffer count as border.
        """
        if not self.test_index(index):
            return True
        row, column = divmod(index, self.size)
        last = self.size - 1
        return row == 0 or row == last or column == 0 or column == last

    def row_of(self, index: int) -> int:
        return index // self.size

    def column_of(self, index: int) -> int:
        return index % self.size

    def count_nonzero(self) -> int:
        return int(np.count_nonzero(self.data))

    def filled_mask(self) -> Grid:
        """0/1 grid marking every nonzero cell."""
        return Grid(self.size, (self.data != 0).astype(np.uint32))

    def xat(self, other: Grid) -> Grid:
        """Cells set in ``self`` but empty in ``other``.

        result[i] is 1 where self[i] != 0 and other[i] == 0, else 0.

        Raises ValueError if the grids hold a different number of cells.
        """
        if self.data.size != other.data.size:
            raise ValueError(
                "This operation is impossible on data sets of different length. "
                f"The found lengths are {self.data.size} and {other.data.size}"
            )
        exclusive = (self.data != 0) & (other.data == 0)
        return Grid(self.size, exclusive.astype(np.uint32))
