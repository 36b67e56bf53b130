"""Scene catalog: the immutable, id-keyed collection of scenes for a session."""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from pathlib import Path
from types import MappingProxyType
from typing import Any, Iterator, Mapping, Sequence, Tuple

from descent.schema import validate_scenes
from descent.settings import SAN_MAX, SAN_MIN, Settings
from descent.world_schema import extract_scene_records, find_duplicate_ids, is_record_list

logger = logging.getLogger(__name__)


class LoadError(ValueError):
    """Scene data could not be turned into a catalog."""


class DuplicateSceneID(LoadError):
    def __init__(self, scene_ids: Sequence[str]) -> None:
        self.scene_ids = tuple(scene_ids)
        super().__init__(f"Duplicate scene IDs: {', '.join(self.scene_ids)}.")


class SceneNotFound(KeyError):
    def __init__(self, scene_id: str) -> None:
        self.scene_id = scene_id
        super().__init__(scene_id)

    def __str__(self) -> str:
        return f"Unknown scene '{self.scene_id}'."


@dataclass(frozen=True)
class Description:
    text: str
    min_sanity: int


@dataclass(frozen=True)
class Option:
    destination: str
    prompt: str
    resolution: str
    min_sanity: int = SAN_MIN
    max_sanity: int = SAN_MAX
    sanity_delta: int = 0


@dataclass(frozen=True)
class Scene:
    id: str
    descriptions: Tuple[Description, ...] = ()
    options: Tuple[Option, ...] = ()


def _description_from_record(record: Mapping[str, Any]) -> Description:
    return Description(text=record["text"], min_sanity=record["min_sanity"])


def _option_from_record(record: Mapping[str, Any], settings: Settings) -> Option:
    return Option(
        destination=record["destination"],
        prompt=record["prompt"],
        resolution=record.get("resolution", ""),
        min_sanity=record.get("min_sanity", settings.san_min),
        max_sanity=record.get("max_sanity", settings.san_max),
        sanity_delta=record.get("sanity_delta", 0),
    )


def scene_from_record(record: Mapping[str, Any], settings: Settings | None = None) -> Scene:
    """Build a :class:`Scene` from a record that already passed validation.

    Option records without sanity bounds take the band of ``settings``.
    """
    settings = settings if settings is not None else Settings()
    return Scene(
        id=record["id"],
        descriptions=tuple(_description_from_record(d) for d in record.get("descriptions") or []),
        options=tuple(_option_from_record(o, settings) for o in record.get("options") or []),
    )


class Catalog:
    """Read-only mapping of scene id to :class:`Scene`.

    The first scene in load order begins the session. Option destinations are
    not checked here; a dangling destination surfaces when a transition tries
    to resolve it.
    """

    def __init__(self, scenes: Sequence[Scene], *, title: str | None = None) -> None:
        duplicates = find_duplicate_ids([scene.id for scene in scenes])
        if duplicates:
            raise DuplicateSceneID(duplicates)
        if not scenes:
            raise LoadError("A catalog needs at least one scene.")
        self._scenes = MappingProxyType({scene.id: scene for scene in scenes})
        self._first_scene_id = scenes[0].id
        self.title = title

    @classmethod
    def build(
        cls, records: Any, *, title: str | None = None, settings: Settings | None = None
    ) -> "Catalog":
        if is_record_list(records):
            scene_ids = [r.get("id") for r in records if isinstance(r, Mapping)]
            duplicates = find_duplicate_ids([sid for sid in scene_ids if isinstance(sid, str)])
            if duplicates:
                raise DuplicateSceneID(duplicates)
        errors = validate_scenes(records)
        if errors:
            raise LoadError("Invalid scene data:\n- " + "\n- ".join(errors))
        return cls([scene_from_record(record, settings) for record in records], title=title)

    def lookup(self, scene_id: str) -> Scene:
        try:
            return self._scenes[scene_id]
        except KeyError:
            raise SceneNotFound(scene_id) from None

    def first_scene_id(self) -> str:
        return self._first_scene_id

    def __contains__(self, scene_id: object) -> bool:
        return scene_id in self._scenes

    def __iter__(self) -> Iterator[Scene]:
        return iter(self._scenes.values())

    def __len__(self) -> int:
        return len(self._scenes)


def load_scene_document(path: Path | str) -> Any:
    path = Path(path)
    try:
        with path.open("r", encoding="utf-8") as handle:
            return json.load(handle)
    except json.JSONDecodeError as exc:
        raise LoadError(f"Failed to parse JSON from {path}: {exc}") from exc
    except UnicodeDecodeError as exc:
        raise LoadError(f"Scenes file {path} is not valid UTF-8: {exc}") from exc
    except OSError as exc:
        raise LoadError(f"Could not read scenes from {path}: {exc}") from exc


def load_catalog(path: Path | str, settings: Settings | None = None) -> Catalog:
    records, title = extract_scene_records(load_scene_document(path))
    catalog = Catalog.build(records, title=title, settings=settings)
    logger.debug(f"Loaded {len(catalog)} scenes from {path}")
    return catalog
