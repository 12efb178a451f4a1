from __future__ import annotations

import pytest

from section_dashboard.errors import ConfigurationError
from section_dashboard.registry import SectionRegistry


def test_register_keeps_order() -> None:
    registry = SectionRegistry()
    registry.register("files", lambda: "files")
    registry.register(None, lambda: "notes")
    registry.register("todo", lambda: "todo")

    assert [spec.tag for spec in registry.list()] == ["files", None, "todo"]
    assert registry.tags() == ["files", "todo"]
    assert len(registry) == 3


def test_duplicate_tag_is_rejected_at_registration() -> None:
    registry = SectionRegistry()
    registry.register("files", lambda: "a")

    with pytest.raises(ConfigurationError, match="files"):
        registry.register("files", lambda: "b")
    assert len(registry) == 1


def test_untagged_specs_may_repeat() -> None:
    registry = SectionRegistry()
    registry.register(None, lambda: "a")
    registry.register(None, lambda: "b")
    assert len(registry) == 2


def test_spec_name_defaults_to_producer_name() -> None:
    def status_section() -> str:
        return "ok"

    registry = SectionRegistry()
    spec = registry.register("status", status_section)
    named = registry.register("other", status_section, name="custom")

    assert spec.name.endswith("status_section")
    assert named.name == "custom"


def test_non_callable_producer_is_rejected() -> None:
    registry = SectionRegistry()
    with pytest.raises(ConfigurationError):
        registry.register("files", "not callable")  # type: ignore[arg-type]
