"""
================================================================================
Table Controls
================================================================================

Controls for ``<table>`` markup: the table, its sections, rows and cells.

Usage:
    table = page.find(Table)
    async for row in table.body.rows():
        print(await row.cell_at(0).text())

Author: Automation Team
License: MIT
================================================================================
"""

from __future__ import annotations

from abc import ABC
from typing import AsyncIterator, List

from ..control_object import ControlObject
from ..search import By


class Cell(ControlObject):
    """A ``<th>`` or ``<td>`` element."""

    search_pattern = By.css("th, td")


class Row(ControlObject):
    """A ``<tr>`` element."""

    search_pattern = By.tag_name("tr")

    async def cells(self) -> AsyncIterator[Cell]:
        async for cell in self.find_all(Cell):
            yield cell

    def cell_at(self, index: int) -> Cell:
        cell = self.find(Cell)
        cell.index = index
        return cell

    async def texts(self) -> List[str]:
        """Text of every cell in this row."""
        return [await cell.text() async for cell in self.cells()]


class TableSection(ControlObject, ABC):
    """Common behaviour of head, body and foot."""

    async def rows(self) -> AsyncIterator[Row]:
        async for row in self.find_all(Row):
            yield row

    def row_at(self, index: int) -> Row:
        row = self.find(Row)
        row.index = index
        return row

    async def row_count(self) -> int:
        return await self.locator.locator(str(Row.search_pattern)).count()


class Head(TableSection):
    search_pattern = By.tag_name("thead")


class Body(TableSection):
    search_pattern = By.tag_name("tbody")


class Foot(TableSection):
    search_pattern = By.tag_name("tfoot")


class Table(ControlObject):
    """A ``<table>`` element."""

    search_pattern = By.tag_name("table")

    @property
    def head(self) -> Head:
        return self.find(Head)

    @property
    def body(self) -> Body:
        return self.find(Body)

    @property
    def foot(self) -> Foot:
        return self.find(Foot)

    async def all_rows(self) -> AsyncIterator[Row]:
        """Rows of head, body and foot, in that order."""
        for section in (self.head, self.body, self.foot):
            async for row in section.rows():
                yield row


__all__ = [
    "Table",
    "TableSection",
    "Head",
    "Body",
    "Foot",
    "Row",
    "Cell",
]
