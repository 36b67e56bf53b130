#!/usr/bin/env python3
"""
Descent terminal session.
- Renders the current scene, reads a numbered choice (or Q), applies it, repeats.
- The story ends when no option is visible at the current sanity.
Usage: python3 session.py [scenes.json] [--settings settings.json] [--debug]
"""

from __future__ import annotations

import argparse
import logging
import sys
from enum import Enum
from pathlib import Path
from typing import Callable, Dict, List, Optional

if __package__ in (None, ""):
    sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

from descent.catalog import Catalog, LoadError, Option, load_catalog
from descent.engine import (
    GameState,
    UnknownDestination,
    apply_transition,
    initial_state,
    select_description,
    visible_options,
)
from descent.settings import SETTINGS_PATH, Settings, load_settings

logger = logging.getLogger(__name__)

InputFunc = Callable[[str], str]
PrintFunc = Callable[[str], None]

PROMPT = "> "
QUIT_KEYWORD = "q"
FORMAT_HELP = "Enter a choice number, or Q to quit."
RANGE_HELP = "Pick a number between 1 and {count}."
ENDING_MESSAGE = "*** The story ends here. Farewell. ***"
QUIT_MESSAGE = "*** You close your eyes and walk away. Farewell. ***"
FATAL_MESSAGE = "[!] Scene '{destination}' does not exist. The story cannot continue."


class SessionStatus(Enum):
    RUNNING = "running"
    ENDED_NORMALLY = "ended_normally"
    ENDED_BY_QUIT = "ended_by_quit"
    ENDED_BY_FATAL_ERROR = "ended_by_fatal_error"

    @property
    def terminal(self) -> bool:
        return self is not SessionStatus.RUNNING


EXIT_CODES: Dict[SessionStatus, int] = {
    SessionStatus.ENDED_NORMALLY: 0,
    SessionStatus.ENDED_BY_QUIT: 0,
    SessionStatus.ENDED_BY_FATAL_ERROR: 1,
}


def emit_print(text: str = "") -> None:
    print(text)


def read_choice(
    option_count: int,
    *,
    input_func: InputFunc = input,
    print_func: PrintFunc = emit_print,
    prompt: str = PROMPT,
) -> Optional[int]:
    """Read lines until one names a visible option; return its 0-based index or ``None`` on quit."""
    while True:
        try:
            raw = input_func(prompt).strip()
        except EOFError:
            return None
        if raw.lower() == QUIT_KEYWORD:
            return None
        if not raw.isdecimal():
            print_func(FORMAT_HELP)
            continue
        try:
            idx = int(raw)
        except ValueError:
            # Digit runs past the int conversion limit are never a valid choice.
            idx = 0
        if not (1 <= idx <= option_count):
            print_func(RANGE_HELP.format(count=option_count))
            continue
        return idx - 1


def render_options(options, print_func: PrintFunc = emit_print) -> None:
    for idx, option in enumerate(options, start=1):
        print_func(f"{idx}: {option.prompt}")


class Session:
    """One play-through over a catalog. Owns the only mutable game state."""

    def __init__(
        self,
        catalog: Catalog,
        settings: Settings | None = None,
        *,
        input_func: InputFunc = input,
        print_func: PrintFunc = emit_print,
    ) -> None:
        self.catalog = catalog
        self.settings = settings if settings is not None else Settings()
        self.input_func = input_func
        self.print_func = print_func
        self.state: GameState = initial_state(catalog, self.settings)
        self.status = SessionStatus.RUNNING
        self.error: UnknownDestination | None = None
        self.history: List[Dict[str, str]] = []

    def record_transition(self, origin: str, target: str, choice_text: str) -> None:
        self.history.append({"from": origin, "to": target, "choice": choice_text})

    def _finish(self, status: SessionStatus, message: str) -> SessionStatus:
        self.status = status
        self.print_func(message)
        return status

    def step(self) -> SessionStatus:
        """Play one turn. Does nothing once the session has ended."""
        if self.status.terminal:
            return self.status

        scene = self.catalog.lookup(self.state.current_scene_id)
        self.print_func(select_description(scene, self.state.sanity))
        self.print_func("")

        options = visible_options(scene, self.state.sanity)
        if not options:
            logger.debug(f"No visible options in '{scene.id}' at sanity {self.state.sanity}")
            return self._finish(SessionStatus.ENDED_NORMALLY, ENDING_MESSAGE)

        render_options(options, self.print_func)
        self.print_func("")

        index = read_choice(
            len(options), input_func=self.input_func, print_func=self.print_func
        )
        if index is None:
            return self._finish(SessionStatus.ENDED_BY_QUIT, QUIT_MESSAGE)

        return self.take(options[index])

    def take(self, option: Option) -> SessionStatus:
        self.print_func(option.resolution)
        self.print_func("")
        try:
            new_state = apply_transition(self.state, option, self.catalog, self.settings)
        except UnknownDestination as exc:
            self.error = exc
            return self._finish(
                SessionStatus.ENDED_BY_FATAL_ERROR,
                FATAL_MESSAGE.format(destination=exc.destination),
            )
        self.record_transition(self.state.current_scene_id, new_state.current_scene_id, option.prompt)
        self.state = new_state
        return self.status

    def run(self) -> SessionStatus:
        while not self.status.terminal:
            self.step()
        return self.status


def parse_args(argv) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Play a Descent story in the terminal.")
    parser.add_argument(
        "scenes",
        nargs="?",
        default=None,
        help="Path to the scenes JSON file (defaults to the settings' scenes_path).",
    )
    parser.add_argument("--settings", default=str(SETTINGS_PATH), help="Path to a settings JSON file.")
    parser.add_argument("--debug", action="store_true", help="Log engine decisions to stderr.")
    return parser.parse_args(argv)


def main(argv=None) -> int:
    args = parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.debug else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )
    settings = load_settings(args.settings)
    scenes_path = args.scenes or settings.scenes_path
    try:
        catalog = load_catalog(scenes_path, settings)
    except LoadError as exc:
        logger.error(f"Could not load scenes from {scenes_path}: {exc}")
        emit_print(f"[!] {exc}")
        return 1

    if catalog.title:
        emit_print(f"=== {catalog.title} ===")
        emit_print("")

    session = Session(catalog, settings)
    try:
        status = session.run()
    except KeyboardInterrupt:
        emit_print("\n[Interrupted] Bye.")
        return 0
    logger.debug(f"Session ended: {status.value} after {len(session.history)} transitions")
    return EXIT_CODES[status]


if __name__ == "__main__":
    sys.exit(main())
