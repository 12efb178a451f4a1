"""Section regeneration for the section dashboard."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import datetime

from .document import Document, DocumentHost
from .errors import ProducerError
from .registry import SectionRegistry, SectionSpec

logger = logging.getLogger(__name__)


@dataclass
class SectionOutcome:
    """Result of running one producer: its content, or the error behind it."""

    spec: SectionSpec
    content: str
    error: ProducerError | None = None

    @property
    def ok(self) -> bool:
        return self.error is None

    def to_dict(self) -> dict[str, object]:
        payload: dict[str, object] = {
            "tag": self.spec.tag,
            "producer": self.spec.name,
            "ok": self.ok,
        }
        if self.error is not None:
            payload["error"] = self.error.detail
        return payload


@dataclass
class RegenerationResult:
    outcomes: list[SectionOutcome] = field(default_factory=list)
    generated_at: str = field(default_factory=lambda: datetime.now().isoformat())

    @property
    def errors(self) -> list[ProducerError]:
        return [outcome.error for outcome in self.outcomes if outcome.error is not None]

    @property
    def ok(self) -> bool:
        return not self.errors

    def to_dict(self) -> dict[str, object]:
        return {
            "sections": [outcome.to_dict() for outcome in self.outcomes],
            "errors": [str(error) for error in self.errors],
            "generated_at": self.generated_at,
        }


class Regenerator:
    """Rewrite a document from the producers in a section registry.

    Each pass walks the registry in order. A tagged section replaces the
    first block carrying its tag; every section is appended at the end of
    the document, so after one pass the generated sections follow registry
    order. Untagged blocks written by an earlier pass are rebuilt. Opaque
    blocks (no tag, not generated) keep their place and content.
    """

    def __init__(self, registry: SectionRegistry) -> None:
        self.registry = registry

    def regenerate(self, document: Document) -> RegenerationResult:
        working = document.copy()
        for block in working.blocks:
            if block.generated and block.tag is None:
                working.remove(block)

        result = RegenerationResult()
        for spec in self.registry:
            if spec.tag is not None:
                existing = working.find(spec.tag)
                if existing is not None:
                    working.remove(existing)

            outcome = self.generate(spec)
            block = working.append(outcome.content)
            # An empty section is left untagged so it is never matched later.
            if spec.tag is not None and outcome.content:
                working.mark_tag(block, spec.tag)
            result.outcomes.append(outcome)

        document.replace_all(working.blocks)
        logger.debug(
            "Regenerated %d sections (%d failed)",
            len(result.outcomes),
            len(result.errors),
        )
        return result

    def regenerate_host(self, host: DocumentHost) -> RegenerationResult:
        """Regenerate a host document and write it back in one replacement."""
        document = Document.from_host(host)
        result = self.regenerate(document)
        document.commit(host)
        return result

    def generate(self, spec: SectionSpec) -> SectionOutcome:
        try:
            content = spec.producer()
        except Exception as exc:
            error = ProducerError(spec.name, f"{type(exc).__name__}: {exc}")
            logger.warning("Section producer failed: %s", error)
            return SectionOutcome(spec=spec, content=error.marker(), error=error)

        if not isinstance(content, str):
            error = ProducerError(
                spec.name, f"returned {type(content).__name__}, expected str"
            )
            logger.warning("Section producer failed: %s", error)
            return SectionOutcome(spec=spec, content=error.marker(), error=error)
        return SectionOutcome(spec=spec, content=content)
