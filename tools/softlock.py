"""Sanity-band analysis helpers for Descent validation."""

from __future__ import annotations

from typing import Iterable, List, Tuple

from descent.catalog import Catalog
from descent.engine import visible_options
from descent.settings import Settings
from descent.world_schema import path


def collapse_ranges(values: Iterable[int]) -> List[Tuple[int, int]]:
    ranges: List[Tuple[int, int]] = []
    for value in sorted(values):
        if ranges and value == ranges[-1][1] + 1:
            ranges[-1] = (ranges[-1][0], value)
        else:
            ranges.append((value, value))
    return ranges


def format_ranges(ranges: Iterable[Tuple[int, int]]) -> str:
    return ", ".join(f"{low}" if low == high else f"{low}..{high}" for low, high in ranges)


def find_dangling_destinations(catalog: Catalog) -> List[str]:
    warnings: List[str] = []
    for scene in catalog:
        for index, option in enumerate(scene.options):
            if option.destination not in catalog:
                warnings.append(
                    f"{path('scenes', scene.id, 'options', index, 'destination')}: "
                    f"targets unknown scene '{option.destination}'."
                )
    return warnings


def analyze_sanity_bands(catalog: Catalog, settings: Settings | None = None) -> List[str]:
    """Report sanity values at which a scene shows a placeholder or silently ends the story."""
    settings = settings if settings is not None else Settings()
    band = range(settings.san_min, settings.san_max + 1)
    warnings: List[str] = []

    for scene in catalog:
        if not scene.descriptions:
            warnings.append(f"{path('scenes', scene.id)}: has no descriptions.")
        else:
            lowest = min(description.min_sanity for description in scene.descriptions)
            uncovered = [sanity for sanity in band if sanity < lowest]
            if uncovered:
                warnings.append(
                    f"{path('scenes', scene.id, 'descriptions')}: no description at sanity "
                    f"{format_ranges(collapse_ranges(uncovered))}."
                )

        for index, option in enumerate(scene.options):
            if option.min_sanity > option.max_sanity:
                warnings.append(
                    f"{path('scenes', scene.id, 'options', index)}: min_sanity {option.min_sanity} "
                    f"exceeds max_sanity {option.max_sanity}; the option never appears."
                )

        if not scene.options:
            continue
        dead = [sanity for sanity in band if not visible_options(scene, sanity)]
        if dead:
            warnings.append(
                f"{path('scenes', scene.id, 'options')}: no option is visible at sanity "
                f"{format_ranges(collapse_ranges(dead))}; the story ends there."
            )

    return warnings
