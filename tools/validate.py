#!/usr/bin/env python3
"""Validate Descent scene data for common authoring mistakes."""

from __future__ import annotations

import argparse
import sys
from pathlib import Path
from typing import Sequence

REPO_ROOT = Path(__file__).resolve().parents[1]
DEFAULT_SCENES = REPO_ROOT / "world" / "scenes.json"

if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))

from descent.catalog import Catalog, LoadError, load_scene_document
from descent.schema import validate_scenes
from descent.settings import SETTINGS_PATH, load_settings
from descent.world_schema import extract_scene_records
from tools.softlock import analyze_sanity_bands, find_dangling_destinations


def parse_args(argv: Sequence[str]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Validate Descent scene content.")
    parser.add_argument(
        "scenes_path",
        nargs="?",
        default=str(DEFAULT_SCENES),
        help="Path to the scenes JSON file.",
    )
    parser.add_argument("--settings", default=str(SETTINGS_PATH), help="Path to a settings JSON file.")
    return parser.parse_args(argv)


def main(argv: Sequence[str]) -> None:
    args = parse_args(argv[1:])
    scenes_path = Path(args.scenes_path).resolve()
    try:
        document = load_scene_document(scenes_path)
    except LoadError as exc:
        print(exc)
        sys.exit(1)

    records, title = extract_scene_records(document)
    errors = validate_scenes(records)
    if errors:
        print("Validation failed (path: message):")
        for err in errors:
            print(f" - {err}")
        sys.exit(1)

    settings = load_settings(args.settings)
    catalog = Catalog.build(records, title=title, settings=settings)
    warnings = find_dangling_destinations(catalog)
    warnings.extend(analyze_sanity_bands(catalog, settings))
    if warnings:
        print("Warnings (path: message):")
        for warning in warnings:
            print(f" - {warning}")

    print(f"Validation passed for {scenes_path} ({len(catalog)} scenes).")


if __name__ == "__main__":
    main(sys.argv)
