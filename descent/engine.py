"""
Sanity-gated scene resolution.
- Descriptions: first entry whose min_sanity is met wins; order matters.
- Options: shown only while min_sanity <= sanity <= max_sanity; zero visible options ends the story.
- Transitions: add the option's delta, clamp, then resolve the destination by id.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Tuple

from descent.catalog import Catalog, Option, Scene
from descent.settings import Settings

logger = logging.getLogger(__name__)

MISSING_DESCRIPTION_TEMPLATE = (
    "[Missing description for scene '{scene_id}': all {count} descriptions need more sanity.]"
)


class TransitionError(Exception):
    """A chosen option could not be turned into a new game state."""


class UnknownDestination(TransitionError):
    def __init__(self, destination: str) -> None:
        self.destination = destination
        super().__init__(f"Scene '{destination}' does not exist.")


@dataclass(frozen=True)
class GameState:
    current_scene_id: str
    sanity: int


def clamp(n, lo, hi): return lo if n < lo else hi if n > hi else n


def initial_state(catalog: Catalog, settings: Settings) -> GameState:
    return GameState(
        current_scene_id=catalog.first_scene_id(),
        sanity=clamp(settings.initial_sanity, settings.san_min, settings.san_max),
    )


def select_description(scene: Scene, sanity: int) -> str:
    for description in scene.descriptions:
        if description.min_sanity <= sanity:
            return description.text
    logger.warning(
        f"No description of scene '{scene.id}' qualifies at sanity {sanity} "
        f"({len(scene.descriptions)} checked)"
    )
    return MISSING_DESCRIPTION_TEMPLATE.format(scene_id=scene.id, count=len(scene.descriptions))


def option_visible(option: Option, sanity: int) -> bool:
    return option.min_sanity <= sanity <= option.max_sanity


def visible_options(scene: Scene, sanity: int) -> Tuple[Option, ...]:
    return tuple(option for option in scene.options if option_visible(option, sanity))


def apply_transition(
    state: GameState, option: Option, catalog: Catalog, settings: Settings
) -> GameState:
    """Return the state after taking ``option``; ``state`` itself is never modified.

    Raises :class:`UnknownDestination` when the option points at a scene the
    catalog does not hold. Printing the option's resolution text is left to
    the caller.
    """
    sanity = clamp(state.sanity + option.sanity_delta, settings.san_min, settings.san_max)
    if option.destination not in catalog:
        logger.error(
            f"Option '{option.prompt}' in scene '{state.current_scene_id}' "
            f"targets unknown scene '{option.destination}'"
        )
        raise UnknownDestination(option.destination)
    logger.debug(
        f"{state.current_scene_id} -> {option.destination} | sanity {state.sanity} -> {sanity}"
    )
    return GameState(current_scene_id=option.destination, sanity=sanity)
