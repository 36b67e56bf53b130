"""Record shapes and path helpers for Descent scene files."""

from __future__ import annotations

from collections import Counter
import json
from typing import Any, Dict, List, Mapping, Sequence, Tuple

DESCRIPTION_FIELDS: Mapping[str, str] = {
    "text": "string shown while sanity is at or above 'min_sanity'",
    "min_sanity": "integer",
}

OPTION_FIELDS: Mapping[str, str] = {
    "destination": "non-empty scene id",
    "prompt": "non-empty string shown in the choice list",
    "resolution": "string printed after the choice is taken",
    "min_sanity": "integer, defaults to 0",
    "max_sanity": "integer, defaults to 100",
    "sanity_delta": "integer, defaults to 0",
}


def path(*parts: object) -> str:
    path_str = ""
    for part in parts:
        if isinstance(part, int):
            path_str = f"{path_str}[{part}]"
            continue
        if not isinstance(part, str):
            part = str(part)
        if part.isidentifier():
            path_str = f"{path_str}.{part}" if path_str else part
        else:
            path_str = f'{path_str}[{json.dumps(part)}]'
    return path_str


def format_validation_message(path_str: str, context: str, message: str) -> str:
    if context:
        return f"{path_str}: {context}: {message}"
    return f"{path_str}: {message}"


def is_non_empty_str(value: Any) -> bool:
    return isinstance(value, str) and value.strip() != ""


def is_int(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def is_record_list(value: Any) -> bool:
    return isinstance(value, Sequence) and not isinstance(value, (str, bytes, Mapping))


def extract_scene_records(document: Any) -> Tuple[Any, str | None]:
    """Return ``(records, title)`` from a decoded scenes document."""
    if isinstance(document, Mapping):
        title = document.get("title")
        return document.get("scenes"), title if is_non_empty_str(title) else None
    return document, None


def find_duplicate_ids(scene_ids: Sequence[str]) -> List[str]:
    return sorted(scene_id for scene_id, count in Counter(scene_ids).items() if count > 1)


def normalize_scenes(
    raw_scenes: Any, ctx: Any | None = None
) -> Tuple[Dict[str, Dict[str, Any]], List[str]]:
    """Key scene records by id, preserving load order.

    Records without a usable id are reported and skipped. Duplicate ids are
    reported too; the first record wins in the returned mapping so callers
    that ignore the errors still see stable data.
    """
    scenes: Dict[str, Dict[str, Any]] = {}
    errors: List[str] = []
    scene_ids: List[str] = []

    def add_error(context: str, path_parts: Sequence[object], message: str) -> None:
        path_str = path(*path_parts)
        errors.append(format_validation_message(path_str, context, message))
        if ctx is not None:
            ctx.add(context, path_str, message)

    if not is_record_list(raw_scenes):
        add_error("Scene data", ("scenes",), "must be a list of scene records.")
        return scenes, errors

    for idx, entry in enumerate(raw_scenes, start=1):
        if not isinstance(entry, Mapping):
            add_error(f"Scene entry {idx}", ("scenes", idx - 1), "must be an object.")
            continue
        scene_id = entry.get("id")
        if not is_non_empty_str(scene_id):
            add_error(f"Scene entry {idx}", ("scenes", idx - 1, "id"), "is missing a valid 'id'.")
            continue
        scene_ids.append(scene_id)
        scenes.setdefault(scene_id, dict(entry))

    duplicates = find_duplicate_ids(scene_ids)
    if duplicates:
        add_error("Scenes", ("scenes",), f"duplicate scene IDs found: {', '.join(duplicates)}.")

    return scenes, errors
