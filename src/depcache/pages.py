"""Page file layout and per-page metadata (link reference snapshots)."""

from __future__ import annotations

import json
import logging
import re
from pathlib import Path
from typing import Any

logger = logging.getLogger(__name__)

_SEPARATORS = re.compile(r"[/;]+")


def clean_id(page_id: str) -> str:
    """Normalize a page id: lowercase, ``:`` namespace separators, no edge colons."""
    page_id = _SEPARATORS.sub(":", page_id.strip().lower())
    page_id = re.sub(r":{2,}", ":", page_id)
    return page_id.strip(":")


class PageStore:
    """Resolves page ids to files under ``data_dir``.

    ``ns:sub:page`` lives at ``pages/ns/sub/page.txt`` and its metadata at
    ``meta/ns/sub/page.meta`` (JSON).
    """

    def __init__(self, data_dir: Path) -> None:
        self._data_dir = Path(data_dir)

    @property
    def data_dir(self) -> Path:
        return self._data_dir

    def page_file(self, page_id: str) -> Path:
        return self._resolve("pages", page_id, ".txt")

    def meta_file(self, page_id: str) -> Path:
        return self._resolve("meta", page_id, ".meta")

    def exists(self, page_id: str) -> bool:
        return self.page_file(page_id).exists()

    def references(self, page_id: str) -> dict[str, bool]:
        """Linked page id → whether it existed when the page was last rendered."""
        relation = self._load_meta(page_id).get("relation", {})
        refs = relation.get("references", {}) if isinstance(relation, dict) else {}
        if not isinstance(refs, dict):
            logger.warning("Ignoring malformed references in metadata for %s", page_id)
            return {}
        return {str(k): bool(v) for k, v in refs.items()}

    def save_references(self, page_id: str, references: dict[str, bool]) -> None:
        """Record the reference snapshot, keeping any other metadata."""
        meta = self._load_meta(page_id)
        relation = meta.get("relation")
        if not isinstance(relation, dict):
            relation = meta["relation"] = {}
        relation["references"] = {clean_id(k): bool(v) for k, v in references.items()}
        path = self.meta_file(page_id)
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(json.dumps(meta, sort_keys=True), encoding="utf-8")

    def _load_meta(self, page_id: str) -> dict[str, Any]:
        path = self.meta_file(page_id)
        try:
            data = json.loads(path.read_text(encoding="utf-8"))
        except FileNotFoundError:
            return {}
        except (OSError, json.JSONDecodeError, UnicodeDecodeError) as e:
            logger.warning("Cannot read metadata %s: %s", path, e)
            return {}
        if not isinstance(data, dict):
            logger.warning("Metadata %s is not a mapping, ignoring", path)
            return {}
        return data

    def _resolve(self, area: str, page_id: str, suffix: str) -> Path:
        parts = clean_id(page_id).split(":")
        return self._data_dir.joinpath(area, *parts[:-1], parts[-1] + suffix)
