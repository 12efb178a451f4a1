"""Section registry for the section dashboard."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable, Iterator

from .errors import ConfigurationError

logger = logging.getLogger(__name__)

Producer = Callable[[], str]


def producer_name(producer: Producer) -> str:
    name = getattr(producer, "__qualname__", None) or getattr(producer, "__name__", None)
    if name:
        module = getattr(producer, "__module__", None)
        return f"{module}.{name}" if module and module != "builtins" else name
    return repr(producer)


@dataclass(frozen=True)
class SectionSpec:
    """One registered section: an optional tag and the producer of its text."""

    tag: str | None
    producer: Producer
    name: str = ""

    def to_dict(self) -> dict[str, object]:
        return {"tag": self.tag, "name": self.name}


class SectionRegistry:
    """Ordered list of section specs; the order is the rendering order."""

    def __init__(self) -> None:
        self._specs: list[SectionSpec] = []

    def register(
        self,
        tag: str | None,
        producer: Producer,
        *,
        name: str | None = None,
    ) -> SectionSpec:
        if not callable(producer):
            raise ConfigurationError(f"Producer for tag {tag!r} is not callable")
        if tag is not None and tag in self.tags():
            raise ConfigurationError(f"Duplicate section tag: {tag!r}")
        spec = SectionSpec(tag=tag, producer=producer, name=name or producer_name(producer))
        self._specs.append(spec)
        logger.debug("Registered section %s (tag=%s)", spec.name, tag)
        return spec

    def list(self) -> list[SectionSpec]:
        return list(self._specs)

    def tags(self) -> list[str]:
        return [spec.tag for spec in self._specs if spec.tag is not None]

    def __iter__(self) -> Iterator[SectionSpec]:
        return iter(list(self._specs))

    def __len__(self) -> int:
        return len(self._specs)
