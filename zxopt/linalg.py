# zxopt - ZX-diagram simplification and circuit extraction
#         for quantum circuit optimization

# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at

#    http://www.apache.org/licenses/LICENSE-2.0

# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.

"""Matrices over the field with two elements, used by the circuit extractor."""

from typing import Iterable, List, Optional, Protocol

__all__ = ['Mat2', 'RowOps']


class RowOps(Protocol):
    def row_add(self, r0: int, r1: int) -> None: ...


class Mat2(object):
    """A matrix over Z2, with methods for Gaussian elimination.

    Rows are plain lists of 0/1 integers.
    """

    def __init__(self, data: List[List[int]]) -> None:
        self.data: List[List[int]] = [[x & 1 for x in row] for row in data]

    @classmethod
    def zeros(cls, rows: int, cols: int) -> 'Mat2':
        return cls([[0] * cols for _ in range(rows)])

    def rows(self) -> int:
        return len(self.data)

    def cols(self) -> int:
        return len(self.data[0]) if self.data else 0

    def copy(self) -> 'Mat2':
        return Mat2([list(row) for row in self.data])

    def __getitem__(self, key):
        r, c = key
        return self.data[r][c]

    def __eq__(self, other: object) -> bool:
        return isinstance(other, Mat2) and self.data == other.data

    def __str__(self) -> str:
        return "\n".join("[ " + " ".join(str(x) for x in row) + " ]" for row in self.data)

    def __repr__(self) -> str:
        return str(self)

    def row_add(self, r0: int, r1: int) -> None:
        """Add r0 to r1"""
        row0 = self.data[r0]
        row1 = self.data[r1]
        for i, v in enumerate(row0):
            if v:
                row1[i] ^= 1

    def row_weight(self, r: int) -> int:
        return sum(self.data[r])

    def xor_rows(self, rows: Iterable[int]) -> List[int]:
        """Returns the sum of the given rows."""
        out = [0] * self.cols()
        for r in rows:
            for i, v in enumerate(self.data[r]):
                if v:
                    out[i] ^= 1
        return out

    def gauss(self, full_reduce: bool = False, x: Optional[RowOps] = None) -> int:
        """Compute the echelon form. Returns the rank of the matrix.

        :param full_reduce: Also eliminate above the pivots, giving the reduced
           echelon form.
        :param x: Optional object with a ``row_add`` method, on which every row
           operation performed on this matrix is replayed.
        """
        rows, cols = self.rows(), self.cols()
        pivot_row = 0
        pivots: List[int] = []
        for c in range(cols):
            if pivot_row >= rows:
                break
            p = next((r for r in range(pivot_row, rows) if self.data[r][c]), None)
            if p is None:
                continue
            if p != pivot_row:
                # bring the pivot up with row additions only, so every step is a CNOT
                self.row_add(p, pivot_row)
                if x is not None:
                    x.row_add(p, pivot_row)
            for r in range(pivot_row + 1, rows):
                if self.data[r][c]:
                    self.row_add(pivot_row, r)
                    if x is not None:
                        x.row_add(pivot_row, r)
            pivots.append(c)
            pivot_row += 1
        if full_reduce:
            for pr, c in reversed(list(enumerate(pivots))):
                for r in range(pr):
                    if self.data[r][c]:
                        self.row_add(pr, r)
                        if x is not None:
                            x.row_add(pr, r)
        return pivot_row

    def rank(self) -> int:
        return self.copy().gauss()
