from __future__ import annotations

import pytest

from section_dashboard.document import Document
from section_dashboard.errors import ConfigurationError
from section_dashboard.layout import ColumnsLayout, SingleLayout, get_layout


def _document() -> Document:
    document = Document(header="Head")
    document.append("* A\n- one", tag="a")
    document.append("* B", tag="b")
    return document


def test_single_layout_is_document_text() -> None:
    document = _document()
    assert SingleLayout().render(document) == document.text


def test_columns_layout_round_robin() -> None:
    rendered = ColumnsLayout(columns=2, width=6, gap="|").render(_document())
    assert rendered.splitlines() == [
        "Head  |* A",
        "      |- one",
        "* B",
    ]


def test_columns_layout_truncates_to_width() -> None:
    document = Document(header="abcdefghij")
    assert ColumnsLayout(columns=1, width=4).render(document) == "abcd"


def test_layout_does_not_mutate_document() -> None:
    document = _document()
    before = document.text
    ColumnsLayout(columns=3).render(document)
    assert document.text == before


def test_get_layout() -> None:
    assert isinstance(get_layout("single", columns=4, width=10), SingleLayout)
    layout = get_layout("columns", columns=3, width=20)
    assert isinstance(layout, ColumnsLayout)
    assert layout.columns == 3
    with pytest.raises(ConfigurationError):
        get_layout("multi-frame")
    with pytest.raises(ConfigurationError):
        ColumnsLayout(columns=0)
