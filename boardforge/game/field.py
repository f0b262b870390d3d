"""Square playing field made of cells."""

from __future__ import annotations

import logging
from typing import Iterable, Iterator

from ..callables import ArgumentComparison, HandlerSpec
from ..config import FieldConfig
from ..dispatchable import Dispatchable
from ..platform import Document, MemoryNode, PresentationNode
from .cell import Cell

logger = logging.getLogger(__name__)


class Field(Dispatchable):
    """Grid of ``size`` x ``size`` cells with its winning lines.

    Cells are addressed as ``(x, y)``: column first, then row.
    """

    def __init__(
        self,
        node: PresentationNode | str | None = None,
        *,
        config: FieldConfig | None = None,
        document: Document | None = None,
        comparison: ArgumentComparison | None = None,
    ) -> None:
        self._config = config or FieldConfig()
        super().__init__(node if node is not None else self._config.selector, document=document, comparison=comparison)
        if self.node is None:
            selector = self._config.selector
            self.create("div", selector[1:] if selector.startswith("#") else None, ("tic-tac-toe__field",))
        self._cells: list[list[Cell]] = []
        self._win_combinations: list[list[Cell]] = []
        self.resize(self._config.size)

    @property
    def size(self) -> int:
        return len(self._cells)

    @property
    def rows(self) -> tuple[tuple[Cell, ...], ...]:
        return tuple(tuple(line) for line in self._cells)

    @property
    def win_combinations(self) -> list[list[Cell]]:
        return self._win_combinations

    @property
    def is_full(self) -> bool:
        return all(cell.is_filled for cell in self.cells())

    def cells(self) -> Iterator[Cell]:
        for line in self._cells:
            yield from line

    def get_cell(self, x: int, y: int) -> Cell | None:
        if not (0 <= x < self.size and 0 <= y < self.size):
            return None
        return self._cells[y][x]

    def position_of(self, target: Cell) -> tuple[int, int] | None:
        for y, line in enumerate(self._cells):
            for x, cell in enumerate(line):
                if cell is target:
                    return x, y
        return None

    def update_win_combinations(self) -> None:
        self._win_combinations = [*self._lines(), *self._columns(), *self._diagonals()]

    def activate_all_cells(self, handler: HandlerSpec, on_remove: HandlerSpec = None) -> None:
        for cell in self.cells():
            cell.deactivate()
            cell.activate(handler, on_remove)

    def deactivate_cell(self, cell: Cell) -> None:
        if isinstance(cell, Cell):
            cell.deactivate()

    def deactivate_all_cells(self) -> None:
        for cell in self.cells():
            cell.deactivate()

    def fill_cell(self, cell: Cell, content: str) -> None:
        if isinstance(cell, Cell):
            cell.fill(content)

    def reset_all_cells(self) -> None:
        """Deactivate and empty every cell and drop the win markers."""
        for cell in self.cells():
            cell.reset()
            cell.remove_win_class_name()

    def add_win_class_name_for(self, cells: Iterable[Cell]) -> None:
        for cell in cells:
            if isinstance(cell, Cell):
                cell.add_win_class_name()

    def resize(self, new_size: int, container: Dispatchable | MemoryNode | None = None) -> None:
        """Grow or shrink the grid, keeping cells published in row-major order.

        The size is mirrored into the ``size_css_var`` style of ``container``
        (the field itself by default).
        """
        if not isinstance(new_size, int) or new_size < 0 or new_size == self.size:
            return
        if new_size > self.size:
            self._grow(new_size)
        else:
            self._shrink(new_size)
        for cell in self.cells():
            cell.publish(self)
        self.update_win_combinations()

        rule = (self._config.size_css_var, str(self.size))
        target = container if container is not None else self
        if isinstance(target, Dispatchable):
            target.add_style(rule)
        elif isinstance(target, MemoryNode):
            target.set_style(*rule)
        logger.debug("Field resized to %s", self.size)

    def _new_cell(self) -> Cell:
        return Cell(
            None,
            self._config.clickable_class,
            self._config.win_class,
            self._config.cell_tag,
            (self._config.cell_class,),
            document=self.document,
            comparison=self._comparison,
        )

    def _grow(self, new_size: int) -> None:
        for line in self._cells:
            while len(line) < new_size:
                line.append(self._new_cell())
        while len(self._cells) < new_size:
            self._cells.append([self._new_cell() for _ in range(new_size)])

    def _shrink(self, new_size: int) -> None:
        for line in self._cells[new_size:]:
            for cell in line:
                self._discard(cell)
        del self._cells[new_size:]
        for line in self._cells:
            for cell in line[new_size:]:
                self._discard(cell)
            del line[new_size:]

    def _discard(self, cell: Cell) -> None:
        cell.deactivate()
        cell.unpublish()

    def _lines(self) -> list[list[Cell]]:
        return [list(line) for line in self._cells]

    def _columns(self) -> list[list[Cell]]:
        return [[line[x] for line in self._cells] for x in range(self.size)]

    def _diagonals(self) -> list[list[Cell]]:
        if not self._cells:
            return []
        last = self.size - 1
        return [
            [self._cells[i][i] for i in range(self.size)],
            [self._cells[i][last - i] for i in range(self.size)],
        ]
