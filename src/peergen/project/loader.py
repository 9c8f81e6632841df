"""Load a host project model from a URL, local file, or stdin.

The project model is a JSON or YAML document describing the package: its
identifier, root directory, optional build work directory, and every
target with its kind, directory and dependency edges::

    id: hello-skip
    directory: .
    targets:
      - name: Hello
        directory: Sources/Hello
      - name: HelloTests
        kind: test
        directory: Tests/HelloTests
        dependencies:
          - target: Hello

This module only turns the document into a ``dict``; validation into a
:class:`~peergen.models.ProjectModel` happens in
:mod:`peergen.project.reader`.
"""

from __future__ import annotations

import json
import sys
from pathlib import Path
from typing import Any

import httpx
import yaml

from peergen.exceptions import ProjectModelError


def load_project(source: str) -> dict[str, Any]:
    """Load a project model from URL, file path, or stdin (``'-'``).

    Args:
        source: A URL (http/https), file path, or ``'-'`` for stdin.

    Returns:
        The parsed document as a dictionary.

    Raises:
        ProjectModelError: If the source cannot be loaded or parsed.
    """
    if source == "-":
        return _load_from_stdin()
    if source.startswith(("http://", "https://")):
        return _load_from_url(source)
    return _load_from_file(source)


def source_base_directory(source: str) -> Path:
    """Directory that relative paths in the model loaded from *source* resolve against.

    For a local file this is the file's own directory; for stdin and URLs
    it is the current working directory.
    """
    if source == "-" or source.startswith(("http://", "https://")):
        return Path.cwd()
    return Path(source).resolve().parent


def _load_from_stdin() -> dict[str, Any]:
    try:
        content = sys.stdin.read()
    except OSError as exc:
        raise ProjectModelError(f"Failed to read project model from stdin: {exc}") from exc

    if not content.strip():
        raise ProjectModelError("No project model received on stdin")

    return _parse_content(content)


def _load_from_url(url: str) -> dict[str, Any]:
    try:
        response = httpx.get(url, timeout=30.0, follow_redirects=True)
        response.raise_for_status()
    except httpx.HTTPStatusError as exc:
        raise ProjectModelError(
            f"HTTP {exc.response.status_code} fetching project model from {url}"
        ) from exc
    except httpx.RequestError as exc:
        raise ProjectModelError(f"Failed to fetch project model from {url}: {exc}") from exc

    content_type = response.headers.get("content-type", "")
    hint = ""
    if "json" in content_type:
        hint = "json"
    elif "yaml" in content_type or "yml" in content_type:
        hint = "yaml"

    return _parse_content(response.text, hint=hint)


def _load_from_file(path: str) -> dict[str, Any]:
    file_path = Path(path)
    if not file_path.is_file():
        raise ProjectModelError(f"Project model not found: {path}")

    try:
        content = file_path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        raise ProjectModelError(f"Failed to read project model {path}: {exc}") from exc

    if not content.strip():
        raise ProjectModelError(f"Project model is empty: {path}")

    suffix = file_path.suffix.lower()
    hint = ""
    if suffix == ".json":
        hint = "json"
    elif suffix in (".yaml", ".yml"):
        hint = "yaml"

    return _parse_content(content, hint=hint)


def _parse_content(content: str, hint: str = "") -> dict[str, Any]:
    """Parse *content* as JSON, falling back to YAML unless hinted otherwise."""
    json_error: Exception | None = None

    if hint != "yaml":
        try:
            result = json.loads(content)
        except json.JSONDecodeError as exc:
            if hint == "json":
                raise ProjectModelError(f"Invalid JSON: {exc}") from exc
            json_error = exc
        else:
            return _require_mapping(result)

    try:
        result = yaml.safe_load(content)
    except yaml.YAMLError as exc:
        msg = "Failed to parse project model as JSON or YAML"
        if json_error:
            msg += f"\n  JSON error: {json_error}"
        msg += f"\n  YAML error: {exc}"
        raise ProjectModelError(msg) from exc

    return _require_mapping(result)


def _require_mapping(result: Any) -> dict[str, Any]:
    if not isinstance(result, dict):
        kind = type(result).__name__ if result is not None else "empty document"
        raise ProjectModelError(f"Project model must be a JSON/YAML object (got {kind})")
    return result
