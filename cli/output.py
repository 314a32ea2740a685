"""Output helpers for the iamexpand CLI."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

from pydantic import BaseModel

FORMATS = ("json", "md", "table")


def _default_serializer(value: Any) -> Any:
    if isinstance(value, BaseModel):
        return value.model_dump(by_alias=True, exclude_unset=True)
    if isinstance(value, (set, frozenset)):
        return sorted(value)
    if isinstance(value, Path):
        return str(value)
    raise TypeError(f"Object of type {type(value).__name__} is not JSON serializable")


def render(data: Any, fmt: str) -> str:
    if fmt == "json":
        return json.dumps(data, indent=2, default=_default_serializer)
    if fmt == "md":
        return _to_markdown(data)
    if fmt == "table":
        return _to_table(data)
    raise ValueError(f"Unsupported format: {fmt}")


def emit(data: Any, fmt: str, output_path: Path | None = None) -> None:
    rendered = render(data, fmt)
    if output_path:
        _write(output_path, rendered)
    else:
        print(rendered)


def write_json(data: Any, output_path: Path) -> None:
    _write(output_path, json.dumps(data, indent=2, default=_default_serializer))


def _write(output_path: Path, rendered: str) -> None:
    output_path.parent.mkdir(parents=True, exist_ok=True)
    output_path.write_text(rendered + ("\n" if not rendered.endswith("\n") else ""), encoding="utf-8")


def _to_markdown(data: Any) -> str:
    if isinstance(data, list):
        if not data:
            return "(no data)"
        if not isinstance(data[0], dict):
            return "\n".join(f"- {item}" for item in data)
        headers = sorted({key for row in data if isinstance(row, dict) for key in row.keys()})
        lines = ["| " + " | ".join(headers) + " |", "| " + " | ".join(["---"] * len(headers)) + " |"]
        for row in data:
            values = [str(row.get(header, "")) for header in headers]
            lines.append("| " + " | ".join(values) + " |")
        return "\n".join(lines)
    if isinstance(data, dict):
        lines = ["| Key | Value |", "| --- | --- |"]
        for key, value in data.items():
            if isinstance(value, list):
                value = ", ".join(str(item) for item in value)
            lines.append(f"| {key} | {value} |")
        return "\n".join(lines)
    return str(data)


def _to_table(data: Any) -> str:
    if isinstance(data, list) and data and isinstance(data[0], dict):
        headers = sorted({key for row in data for key in row.keys()})
        widths = {header: max(len(header), *(len(str(row.get(header, ""))) for row in data)) for header in headers}
        header_line = " ".join(header.ljust(widths[header]) for header in headers)
        sep_line = " ".join("-" * widths[header] for header in headers)
        rows = [" ".join(str(row.get(header, "")).ljust(widths[header]) for header in headers) for row in data]
        return "\n".join([header_line, sep_line, *rows])
    if isinstance(data, dict):
        width = max(len(str(key)) for key in data.keys()) if data else 0
        return "\n".join(f"{str(key).ljust(width)} : {value}" for key, value in data.items())
    if isinstance(data, list):
        return "\n".join(str(item) for item in data)
    return str(data)


__all__ = ["FORMATS", "emit", "render", "write_json"]
