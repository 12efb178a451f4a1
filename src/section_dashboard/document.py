"""Document model and host surface for the section dashboard.

A document is an ordered list of blocks joined by a single newline. Blocks
may carry a tag so a later regeneration pass can find and replace them.
Blocks without a tag that were not written by a pass are opaque content
(a header, user text) and are never touched.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from typing import Iterable, Protocol, Sequence

from .errors import HostIOError

logger = logging.getLogger(__name__)

DELIMITER = "\n"


@dataclass
class Block:
    content: str
    tag: str | None = None
    generated: bool = False
    start: int = 0
    end: int = 0

    def to_dict(self) -> dict[str, object]:
        return {
            "tag": self.tag,
            "content": self.content,
            "generated": self.generated,
            "start": self.start,
            "end": self.end,
        }


def layout_blocks(blocks: Iterable[Block], offset: int = 0) -> list[Block]:
    """Return copies of ``blocks`` with contiguous ranges starting at ``offset``."""
    placed: list[Block] = []
    position = offset
    for block in blocks:
        end = position + len(block.content)
        placed.append(replace(block, start=position, end=end))
        position = end + len(DELIMITER)
    return placed


def render_blocks(blocks: Iterable[Block]) -> str:
    return DELIMITER.join(block.content for block in blocks)


class DocumentHost(Protocol):
    """The three primitives a host document must provide."""

    def read_blocks(self) -> list[Block]:
        ...

    def replace_range(self, start: int, end: int, blocks: Sequence[Block]) -> None:
        ...

    def cursor(self) -> int:
        ...


class Document:
    """In-memory document made of optionally tagged blocks."""

    def __init__(self, header: str | None = None) -> None:
        self._blocks: list[Block] = []
        if header is not None:
            self._blocks.append(Block(content=header))
        self._reindex()

    @classmethod
    def from_blocks(cls, blocks: Iterable[Block]) -> "Document":
        document = cls()
        document.replace_all(blocks)
        return document

    @classmethod
    def from_host(cls, host: DocumentHost) -> "Document":
        try:
            blocks = host.read_blocks()
        except HostIOError:
            raise
        except Exception as exc:
            raise HostIOError(f"Failed to read host document: {exc}") from exc
        _check_ranges(blocks)
        return cls.from_blocks(blocks)

    @property
    def blocks(self) -> tuple[Block, ...]:
        return tuple(self._blocks)

    @property
    def text(self) -> str:
        return render_blocks(self._blocks)

    def cursor(self) -> int:
        return len(self.text)

    def find(self, tag: str | None) -> Block | None:
        if tag is None:
            return None
        for block in self._blocks:
            if block.tag == tag:
                return block
        return None

    def remove(self, block: Block) -> None:
        for index, existing in enumerate(self._blocks):
            if existing is block:
                del self._blocks[index]
                self._reindex()
                return
        raise ValueError(f"Block not in document: {block.tag!r}")

    def append(self, content: str, tag: str | None = None, generated: bool = True) -> Block:
        block = Block(content=content, tag=tag, generated=generated)
        self._blocks.append(block)
        self._reindex()
        return block

    def mark_tag(self, block: Block, tag: str) -> None:
        if block.tag == tag:
            return
        block.tag = tag

    def replace_all(self, blocks: Iterable[Block]) -> None:
        self._blocks = [replace(block) for block in blocks]
        self._reindex()

    def copy(self) -> "Document":
        return Document.from_blocks(self._blocks)

    def commit(self, host: DocumentHost) -> None:
        """Write the whole document back to ``host`` in one replacement."""
        try:
            host.replace_range(0, host.cursor(), self.blocks)
        except HostIOError:
            raise
        except Exception as exc:
            raise HostIOError(f"Failed to write host document: {exc}") from exc

    def to_dict(self) -> dict[str, object]:
        return {"blocks": [block.to_dict() for block in self._blocks]}

    def _reindex(self) -> None:
        position = 0
        for block in self._blocks:
            block.start = position
            block.end = position + len(block.content)
            position = block.end + len(DELIMITER)

    def __len__(self) -> int:
        return len(self._blocks)


def _check_ranges(blocks: Sequence[Block]) -> None:
    position = 0
    for block in blocks:
        if block.start != position or block.end - block.start != len(block.content):
            raise HostIOError(
                f"Inconsistent block range [{block.start}, {block.end}) at offset {position}"
            )
        position = block.end + len(DELIMITER)


class BufferHost:
    """Text buffer with tagged regions, standing in for an editor buffer."""

    def __init__(self, blocks: Iterable[Block] | None = None) -> None:
        self._regions = layout_blocks(blocks or [])
        self._text = render_blocks(self._regions)

    @classmethod
    def from_text(cls, text: str) -> "BufferHost":
        return cls([Block(content=text)] if text else [])

    @property
    def text(self) -> str:
        return self._text

    def read_blocks(self) -> list[Block]:
        return [replace(region) for region in self._regions]

    def cursor(self) -> int:
        return len(self._text)

    def replace_range(self, start: int, end: int, blocks: Sequence[Block]) -> None:
        """Replace the blocks lying within ``[start, end]`` by ``blocks``.

        The range must fall on block boundaries; text outside it is kept.
        """
        if not 0 <= start <= end <= len(self._text):
            raise HostIOError(f"Range [{start}, {end}) outside buffer of {len(self._text)}")
        before: list[Block] = []
        after: list[Block] = []
        for region in self._regions:
            if region.end < start:
                before.append(region)
            elif region.start > end:
                after.append(region)
            elif region.start < start or region.end > end:
                raise HostIOError(f"Range [{start}, {end}) splits block {region.tag!r}")

        self._regions = layout_blocks([*before, *blocks, *after])
        self._text = render_blocks(self._regions)
        logger.debug("Replaced [%d, %d) with %d blocks", start, end, len(blocks))
