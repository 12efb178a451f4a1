"""Section content producers.

Every producer is a zero-argument callable returning the text of one
section. The factories here build producers from configuration entries.
"""

from __future__ import annotations

import importlib
import logging
import shlex
import subprocess
from pathlib import Path, PurePosixPath
from typing import Any, Callable, Iterable, Mapping

import httpx

from .errors import ConfigurationError
from .registry import Producer

logger = logging.getLogger(__name__)


def group_by_directory(paths: Iterable[str]) -> list[tuple[str, list[str]]]:
    """Group paths by parent directory, directories sorted, files in input order."""
    groups: dict[str, list[str]] = {}
    for raw in paths:
        path = PurePosixPath(raw)
        groups.setdefault(str(path.parent), []).append(path.name)
    return sorted(groups.items(), key=lambda item: item[0])


def render_file_listing(title: str, categories: Mapping[str, Iterable[str]]) -> str:
    lines = [f"* {title}"]
    for label, paths in categories.items():
        groups = group_by_directory(paths)
        if not groups:
            continue
        lines.append(f"** {label}")
        for directory, names in groups:
            lines.append(f"- {directory}/")
            lines.extend(f"  - {name}" for name in names)
    return "\n".join(lines)


def read_file_list(path: Path) -> list[str]:
    """Read newline separated paths, skipping blanks and ``#`` comments."""
    entries: list[str] = []
    for line in path.read_text(encoding="utf-8").splitlines():
        stripped = line.strip()
        if not stripped or stripped.startswith("#"):
            continue
        entries.append(stripped)
    return entries


def file_listing_producer(
    title: str,
    categories: Mapping[str, Iterable[str] | Path | Callable[[], Iterable[str]]],
) -> Producer:
    """Build a producer listing files per category, grouped by directory.

    A category source is a list of paths, a ``Path`` to a file list read on
    every call, or a callable returning paths.
    """

    def produce() -> str:
        resolved: dict[str, list[str]] = {}
        for label, source in categories.items():
            if isinstance(source, Path):
                resolved[label] = read_file_list(source)
            elif callable(source):
                resolved[label] = list(source())
            else:
                resolved[label] = list(source)
        return render_file_listing(title, resolved)

    produce.__qualname__ = f"file_listing[{title}]"
    return produce


def text_producer(text: str) -> Producer:
    def produce() -> str:
        return text

    produce.__qualname__ = "text"
    return produce


def _with_title(title: str | None, body: str) -> str:
    body = body.rstrip("\n")
    if not title:
        return body
    return f"* {title}\n{body}" if body else f"* {title}"


def command_producer(
    argv: list[str],
    title: str | None = None,
    timeout: float = 10.0,
    cwd: Path | None = None,
) -> Producer:
    """Build a producer that runs ``argv`` and returns its stdout."""

    def produce() -> str:
        logger.debug("Running section command: %s", " ".join(argv))
        result = subprocess.run(
            argv,
            capture_output=True,
            text=True,
            timeout=timeout,
            cwd=cwd,
        )
        if result.returncode != 0:
            stderr = result.stderr.strip()
            raise RuntimeError(
                f"command exited with {result.returncode}" + (f": {stderr}" if stderr else "")
            )
        return _with_title(title, result.stdout)

    produce.__qualname__ = f"command[{argv[0] if argv else ''}]"
    return produce


def http_producer(
    url: str,
    title: str | None = None,
    timeout: float = 10.0,
    client: httpx.Client | None = None,
) -> Producer:
    """Build a producer that fetches ``url`` and returns the response body."""

    def produce() -> str:
        if client is not None:
            response = client.get(url, timeout=timeout)
        else:
            response = httpx.get(url, timeout=timeout)
        response.raise_for_status()
        return _with_title(title, response.text)

    produce.__qualname__ = f"http[{url}]"
    return produce


def callable_producer(target: str) -> Producer:
    """Import a zero-argument callable from a ``module:function`` path."""
    module_name, _, attr = target.partition(":")
    if not module_name or not attr:
        raise ConfigurationError(f"Expected 'module:function', got {target!r}")
    try:
        module = importlib.import_module(module_name)
    except ImportError as exc:
        raise ConfigurationError(f"Cannot import {module_name!r}: {exc}") from exc
    func: Any = module
    for part in attr.split("."):
        func = getattr(func, part, None)
        if func is None:
            raise ConfigurationError(f"{target!r} not found")
    if not callable(func):
        raise ConfigurationError(f"{target!r} is not callable")
    return func


def _timeout(options: Mapping[str, Any]) -> float:
    value = options.get("timeout", 10)
    try:
        return float(value)
    except (TypeError, ValueError) as exc:
        raise ConfigurationError(f"'timeout' must be a number, got {value!r}") from exc


def _build_files(options: Mapping[str, Any]) -> Producer:
    title = options.get("title", "Files")
    categories: dict[str, Iterable[str] | Path] = {}
    raw = options.get("categories") or {}
    if not isinstance(raw, Mapping):
        raise ConfigurationError("files section 'categories' must be a table")
    for label, source in raw.items():
        if isinstance(source, str):
            categories[label] = Path(source).expanduser()
        elif isinstance(source, list):
            categories[label] = [str(item) for item in source]
        else:
            raise ConfigurationError(
                f"files category {label!r} must be a path or a list of paths"
            )
    return file_listing_producer(title, categories)


def _build_text(options: Mapping[str, Any]) -> Producer:
    if "text" not in options:
        raise ConfigurationError("text section requires 'text'")
    return text_producer(str(options["text"]))


def _build_command(options: Mapping[str, Any]) -> Producer:
    argv = options.get("command")
    if isinstance(argv, str):
        try:
            argv = shlex.split(argv)
        except ValueError as exc:
            raise ConfigurationError(f"Cannot parse command {argv!r}: {exc}") from exc
    if not argv:
        raise ConfigurationError("command section requires 'command'")
    cwd = options.get("cwd")
    return command_producer(
        [str(arg) for arg in argv],
        title=options.get("title"),
        timeout=_timeout(options),
        cwd=Path(cwd).expanduser() if cwd else None,
    )


def _build_http(options: Mapping[str, Any]) -> Producer:
    url = options.get("url")
    if not url:
        raise ConfigurationError("http section requires 'url'")
    return http_producer(
        str(url),
        title=options.get("title"),
        timeout=_timeout(options),
    )


def _build_callable(options: Mapping[str, Any]) -> Producer:
    target = options.get("target")
    if not target:
        raise ConfigurationError("callable section requires 'target'")
    return callable_producer(str(target))


PRODUCER_KINDS: dict[str, Callable[[Mapping[str, Any]], Producer]] = {
    "files": _build_files,
    "text": _build_text,
    "command": _build_command,
    "http": _build_http,
    "callable": _build_callable,
}


def build_producer(kind: str, options: Mapping[str, Any]) -> Producer:
    builder = PRODUCER_KINDS.get(kind)
    if builder is None:
        known = ", ".join(sorted(PRODUCER_KINDS))
        raise ConfigurationError(f"Unknown producer kind {kind!r} (known: {known})")
    return builder(options)
