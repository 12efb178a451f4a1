"""Display layouts applied to a regenerated document."""

from __future__ import annotations

from abc import ABC, abstractmethod
from itertools import zip_longest

from .document import Document
from .errors import ConfigurationError


class Layout(ABC):
    name = ""

    @abstractmethod
    def render(self, document: Document) -> str:
        raise NotImplementedError


class SingleLayout(Layout):
    """The whole document in one pane."""

    name = "single"

    def render(self, document: Document) -> str:
        return document.text


class ColumnsLayout(Layout):
    """Blocks distributed round-robin over side-by-side columns."""

    name = "columns"

    def __init__(self, columns: int = 2, width: int = 40, gap: str = "  ") -> None:
        if columns < 1:
            raise ConfigurationError(f"columns must be >= 1, got {columns}")
        if width < 1:
            raise ConfigurationError(f"width must be >= 1, got {width}")
        self.columns = columns
        self.width = width
        self.gap = gap

    def render(self, document: Document) -> str:
        panes: list[list[str]] = [[] for _ in range(self.columns)]
        for index, block in enumerate(document.blocks):
            pane = panes[index % self.columns]
            if pane:
                pane.append("")
            pane.extend(block.content.splitlines() or [""])

        rows = []
        for cells in zip_longest(*panes, fillvalue=""):
            row = self.gap.join(cell[: self.width].ljust(self.width) for cell in cells)
            rows.append(row.rstrip())
        return "\n".join(rows)


LAYOUTS: dict[str, type[Layout]] = {
    SingleLayout.name: SingleLayout,
    ColumnsLayout.name: ColumnsLayout,
}


def get_layout(name: str, **options: int) -> Layout:
    layout_cls = LAYOUTS.get(name)
    if layout_cls is None:
        raise ConfigurationError(
            f"Unknown layout {name!r} (known: {', '.join(sorted(LAYOUTS))})"
        )
    if layout_cls is SingleLayout:
        return SingleLayout()
    return layout_cls(**options)
