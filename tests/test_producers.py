from __future__ import annotations

import shlex
import sys
from pathlib import Path

import httpx
import pytest

from section_dashboard.errors import ConfigurationError
from section_dashboard.producers import (
    build_producer,
    callable_producer,
    command_producer,
    file_listing_producer,
    group_by_directory,
    http_producer,
    read_file_list,
    render_file_listing,
)


def test_group_by_directory_sorts_groups_and_keeps_file_order() -> None:
    groups = group_by_directory(["src/b.py", "docs/guide.md", "src/a.py", "README.md"])
    assert groups == [
        (".", ["README.md"]),
        ("docs", ["guide.md"]),
        ("src", ["b.py", "a.py"]),
    ]


def test_render_file_listing_omits_empty_categories() -> None:
    text = render_file_listing(
        "Files",
        {
            "tracked": ["src/a.py", "notes/todo.org"],
            "known-but-unlisted": [],
            "deprecated": ["old/x.txt"],
        },
    )
    assert text == (
        "* Files\n"
        "** tracked\n"
        "- notes/\n"
        "  - todo.org\n"
        "- src/\n"
        "  - a.py\n"
        "** deprecated\n"
        "- old/\n"
        "  - x.txt"
    )


def test_render_file_listing_all_empty() -> None:
    assert render_file_listing("Files", {"tracked": []}) == "* Files"


def test_file_listing_reads_list_files_on_each_call(tmp_path: Path) -> None:
    list_path = tmp_path / "tracked.txt"
    list_path.write_text("# comment\na/one.txt\n\n", encoding="utf-8")
    produce = file_listing_producer("Files", {"tracked": list_path})

    assert produce() == "* Files\n** tracked\n- a/\n  - one.txt"
    list_path.write_text("a/one.txt\na/two.txt\n", encoding="utf-8")
    assert produce().endswith("  - one.txt\n  - two.txt")


def test_read_file_list_missing_file_raises(tmp_path: Path) -> None:
    with pytest.raises(FileNotFoundError):
        read_file_list(tmp_path / "missing.txt")


def test_command_producer_returns_stdout() -> None:
    produce = command_producer([sys.executable, "-c", "print('clean')"], title="Git")
    assert produce() == "* Git\nclean"


def test_command_producer_raises_on_failure() -> None:
    produce = command_producer([sys.executable, "-c", "import sys; sys.exit(3)"])
    with pytest.raises(RuntimeError, match="exited with 3"):
        produce()


def test_http_producer_uses_response_body() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        assert request.url.path == "/status"
        return httpx.Response(200, text="all green\n")

    client = httpx.Client(transport=httpx.MockTransport(handler))
    produce = http_producer("http://ci.local/status", title="CI", client=client)
    assert produce() == "* CI\nall green"


def test_http_producer_raises_on_error_status() -> None:
    client = httpx.Client(transport=httpx.MockTransport(lambda request: httpx.Response(503)))
    produce = http_producer("http://ci.local/status", client=client)
    with pytest.raises(httpx.HTTPStatusError):
        produce()


def test_callable_producer_imports_target() -> None:
    produce = callable_producer("os:getcwd")
    assert isinstance(produce(), str)


def test_callable_producer_rejects_bad_target() -> None:
    with pytest.raises(ConfigurationError):
        callable_producer("os.getcwd")
    with pytest.raises(ConfigurationError):
        callable_producer("os:does_not_exist")


def test_build_producer_text_and_unknown_kind() -> None:
    assert build_producer("text", {"text": "* Notes"})() == "* Notes"
    with pytest.raises(ConfigurationError, match="Unknown producer kind"):
        build_producer("agenda", {})


def test_build_producer_files_from_options(tmp_path: Path) -> None:
    list_path = tmp_path / "deprecated.txt"
    list_path.write_text("lib/old.py\n", encoding="utf-8")
    produce = build_producer(
        "files",
        {
            "title": "Tracked",
            "categories": {"tracked": ["b/x.md"], "deprecated": str(list_path)},
        },
    )
    assert produce() == "* Tracked\n** tracked\n- b/\n  - x.md\n** deprecated\n- lib/\n  - old.py"


def test_command_string_keeps_quoted_arguments() -> None:
    command = f"{shlex.quote(sys.executable)} -c \"import sys; print('|'.join(sys.argv[1:]))\" 'a b' c"
    produce = build_producer("command", {"command": command})
    assert produce() == "a b|c"


def test_command_string_with_unbalanced_quotes() -> None:
    with pytest.raises(ConfigurationError, match="Cannot parse command"):
        build_producer("command", {"command": "echo 'oops"})


def test_bad_timeout_is_configuration_error() -> None:
    with pytest.raises(ConfigurationError, match="timeout"):
        build_producer("http", {"url": "http://ci.local", "timeout": "soon"})
