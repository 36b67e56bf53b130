import pytest

from descent.catalog import Catalog, Description, Option, Scene
from descent.engine import (
    GameState,
    UnknownDestination,
    apply_transition,
    clamp,
    initial_state,
    select_description,
    visible_options,
)
from descent.settings import Settings


def option(destination: str = "end", prompt: str = "Go", resolution: str = "", **kwargs) -> Option:
    return Option(destination=destination, prompt=prompt, resolution=resolution, **kwargs)


def build_catalog(*scenes: Scene) -> Catalog:
    return Catalog(list(scenes))


def test_select_description_prefers_first_qualifying_entry() -> None:
    scene = Scene(
        id="room",
        descriptions=(Description("Calm room.", 50), Description("Terrifying room.", 0)),
    )
    assert select_description(scene, 30) == "Terrifying room."
    assert select_description(scene, 50) == "Calm room."
    assert select_description(scene, 100) == "Calm room."


def test_select_description_is_first_match_not_best_match() -> None:
    scene = Scene(
        id="room",
        descriptions=(Description("Catch-all.", 0), Description("Never reached.", 80)),
    )
    assert select_description(scene, 90) == "Catch-all."


def test_select_description_fallback_names_scene_and_count() -> None:
    scene = Scene(
        id="attic",
        descriptions=(Description("Bright.", 90), Description("Dim.", 60)),
    )
    text = select_description(scene, 10)
    assert "attic" in text
    assert "2" in text


def test_select_description_without_descriptions_uses_fallback() -> None:
    text = select_description(Scene(id="void"), 50)
    assert "void" in text
    assert "0" in text


def test_select_description_is_repeatable() -> None:
    scene = Scene(id="room", descriptions=(Description("Calm.", 40), Description("Bad.", 0)))
    assert select_description(scene, 20) == select_description(scene, 20)


def test_visible_options_uses_inclusive_bounds_and_keeps_order() -> None:
    first = option("a", "First", min_sanity=0, max_sanity=30)
    second = option("b", "Second", min_sanity=30, max_sanity=30)
    third = option("c", "Third", min_sanity=31, max_sanity=100)
    fourth = option("d", "Fourth", min_sanity=10, max_sanity=60)
    scene = Scene(id="hub", options=(first, second, third, fourth))

    assert visible_options(scene, 30) == (first, second, fourth)
    assert visible_options(scene, 31) == (third, fourth)
    assert visible_options(scene, 0) == (first,)
    assert visible_options(scene, 30) == visible_options(scene, 30)


def test_visible_options_empty_when_nothing_qualifies() -> None:
    scene = Scene(id="gate", options=(option(min_sanity=80), option(min_sanity=90)))
    assert visible_options(scene, 10) == ()


@pytest.mark.parametrize(
    ("prior", "delta", "expected"),
    [
        (100, -10, 90),
        (95, 20, 100),
        (5, -20, 0),
        (0, 0, 0),
        (50, 50, 100),
        (100, -150, 0),
    ],
)
def test_transition_clamps_sanity(prior: int, delta: int, expected: int) -> None:
    catalog = build_catalog(Scene(id="start"), Scene(id="end"))
    state = GameState(current_scene_id="start", sanity=prior)
    new_state = apply_transition(state, option(sanity_delta=delta), catalog, Settings())
    assert new_state.sanity == expected == max(0, min(100, prior + delta))


def test_transition_moves_to_destination() -> None:
    leave = option("end", "Leave", resolution="You leave.", min_sanity=0, max_sanity=100, sanity_delta=-10)
    catalog = build_catalog(
        Scene(id="start", descriptions=(Description("You wake up.", 0),), options=(leave,)),
        Scene(id="end"),
    )
    state = initial_state(catalog, Settings())
    assert state == GameState(current_scene_id="start", sanity=100)

    new_state = apply_transition(state, leave, catalog, Settings())

    assert new_state == GameState(current_scene_id="end", sanity=90)
    assert state == GameState(current_scene_id="start", sanity=100)


def test_transition_to_unknown_destination_fails() -> None:
    catalog = build_catalog(Scene(id="start"))
    state = GameState(current_scene_id="start", sanity=70)
    with pytest.raises(UnknownDestination) as excinfo:
        apply_transition(state, option("missing_scene", sanity_delta=-5), catalog, Settings())
    assert excinfo.value.destination == "missing_scene"
    assert state.sanity == 70


def test_transition_respects_configured_bounds() -> None:
    catalog = build_catalog(Scene(id="start"), Scene(id="end"))
    settings = Settings(san_min=10, san_max=60, initial_sanity=60)
    state = initial_state(catalog, settings)
    assert apply_transition(state, option(sanity_delta=30), catalog, settings).sanity == 60
    assert apply_transition(state, option(sanity_delta=-80), catalog, settings).sanity == 10


def test_clamp() -> None:
    assert clamp(-1, 0, 100) == 0
    assert clamp(101, 0, 100) == 100
    assert clamp(42, 0, 100) == 42
