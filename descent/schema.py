"""Validation for Descent scene records."""

from __future__ import annotations

from typing import Any, List, Mapping, Sequence

from descent.world_schema import (
    format_validation_message,
    is_int,
    is_non_empty_str,
    is_record_list,
    normalize_scenes,
    path,
)


class ValidationContext:
    """Utility container for accumulating validation errors."""

    def __init__(self) -> None:
        self.errors: List[str] = []

    def add(self, context: str, path_str: str, message: str) -> None:
        self.errors.append(format_validation_message(path_str, context, message))


def require(condition: bool, context: str, path_str: str, message: str, ctx: ValidationContext) -> None:
    if not condition:
        ctx.add(context, path_str, message)


def _check_int_field(
    record: Mapping[str, Any],
    field: str,
    context: str,
    path_parts: Sequence[object],
    ctx: ValidationContext,
    *,
    required: bool,
) -> None:
    if field not in record:
        require(not required, context, path(*path_parts, field), f"requires an integer '{field}'.", ctx)
        return
    require(
        is_int(record[field]),
        context,
        path(*path_parts, field),
        f"'{field}' must be an integer.",
        ctx,
    )


def validate_description(
    description: Any,
    scene_id: str,
    index: int,
    path_parts: Sequence[object],
    ctx: ValidationContext,
) -> None:
    context = f"Description {index} in scene '{scene_id}'"
    if not isinstance(description, Mapping):
        ctx.add(context, path(*path_parts), "must be an object.")
        return
    require(
        isinstance(description.get("text"), str),
        context,
        path(*path_parts, "text"),
        "requires a string 'text'.",
        ctx,
    )
    _check_int_field(description, "min_sanity", context, path_parts, ctx, required=True)


def validate_option(
    option: Any,
    scene_id: str,
    index: int,
    path_parts: Sequence[object],
    ctx: ValidationContext,
) -> None:
    # Destination existence is checked at transition time, not here.
    context = f"Option {index} in scene '{scene_id}'"
    if not isinstance(option, Mapping):
        ctx.add(context, path(*path_parts), "must be an object.")
        return

    destination = option.get("destination")
    if destination is None:
        ctx.add(context, path(*path_parts, "destination"), "is missing a 'destination'.")
    elif not is_non_empty_str(destination):
        ctx.add(context, path(*path_parts, "destination"), "must use a non-empty string 'destination'.")

    require(
        is_non_empty_str(option.get("prompt")),
        context,
        path(*path_parts, "prompt"),
        "requires non-empty 'prompt'.",
        ctx,
    )
    require(
        isinstance(option.get("resolution", ""), str),
        context,
        path(*path_parts, "resolution"),
        "'resolution' must be a string.",
        ctx,
    )
    for field in ("min_sanity", "max_sanity", "sanity_delta"):
        _check_int_field(option, field, context, path_parts, ctx, required=False)


def _validate_record_list(
    scene: Mapping[str, Any], field: str, scene_id: str, ctx: ValidationContext
) -> Sequence[Any]:
    entries = scene.get(field)
    if entries is None:
        return []
    if not is_record_list(entries):
        ctx.add(
            f"Scene '{scene_id}'",
            path("scenes", scene_id, field),
            f"'{field}' must be a list if present.",
        )
        return []
    return entries


def validate_scenes(raw_scenes: Any) -> List[str]:
    """Return every problem found in ``raw_scenes`` as a path-qualified message."""
    ctx = ValidationContext()

    scenes, _scene_errors = normalize_scenes(raw_scenes, ctx)
    if is_record_list(raw_scenes) and not raw_scenes:
        ctx.add("Scene data", path("scenes"), "must contain at least one scene.")

    for scene_id, scene in scenes.items():
        descriptions = _validate_record_list(scene, "descriptions", scene_id, ctx)
        for index, description in enumerate(descriptions, start=1):
            validate_description(
                description,
                scene_id,
                index,
                ("scenes", scene_id, "descriptions", index - 1),
                ctx,
            )
        options = _validate_record_list(scene, "options", scene_id, ctx)
        for index, option in enumerate(options, start=1):
            validate_option(
                option,
                scene_id,
                index,
                ("scenes", scene_id, "options", index - 1),
                ctx,
            )

    return ctx.errors
