"""Helpers to persist intermediate representations for debugging."""
from __future__ import annotations

import json
from dataclasses import asdict, is_dataclass
from pathlib import Path
from typing import Any

from tiptap_renderer.model.document_model import LoadedContent


class DebugDumper:
    """Writes the normalized content onto disk for inspection."""

    def __init__(self, directory: Path) -> None:
        self.directory = directory

    def dump(self, loaded: LoadedContent) -> Path:
        """Persist the loaded content (kind plus tree) as JSON for offline analysis."""
        self.directory.mkdir(parents=True, exist_ok=True)
        payload = {"kind": type(loaded).__name__, "value": self._serialize(loaded)}
        target = self.directory / "document_tree.json"
        target.write_text(json.dumps(payload, indent=2, ensure_ascii=False, default=str), encoding="utf-8")
        return target

    def _serialize(self, value: Any) -> Any:
        if is_dataclass(value):
            return {k: self._serialize(v) for k, v in asdict(value).items()}
        if isinstance(value, dict):
            return {k: self._serialize(v) for k, v in value.items()}
        if isinstance(value, (list, tuple)):
            return [self._serialize(v) for v in value]
        return value
