"""Update the README block that documents scene record fields."""

from __future__ import annotations

import sys
from pathlib import Path
from typing import Mapping

REPO_ROOT = Path(__file__).resolve().parents[1]

if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))

from descent import world_schema

MARKER_START = "<!-- schema-docs:start -->"
MARKER_END = "<!-- schema-docs:end -->"


def _format_fields(fields: Mapping[str, str]) -> str:
    return ", ".join(f"`{name}` ({rule})" for name, rule in fields.items())


def render_block() -> str:
    return "\n".join(
        [
            f"- **Description fields:** {_format_fields(world_schema.DESCRIPTION_FIELDS)}",
            f"- **Option fields:** {_format_fields(world_schema.OPTION_FIELDS)}",
            "- _Regenerate docs with `python tools/generate_schema_docs.py` when the record shapes change._",
        ]
    )


def replace_block(path: Path, new_block: str) -> None:
    content = path.read_text(encoding="utf-8")
    if MARKER_START not in content or MARKER_END not in content:
        raise RuntimeError(f"Markers not found in {path}.")
    before, rest = content.split(MARKER_START, 1)
    _, after = rest.split(MARKER_END, 1)
    updated = f"{before}{MARKER_START}\n{new_block}\n{MARKER_END}{after}"
    path.write_text(updated, encoding="utf-8")


def main() -> None:
    replace_block(REPO_ROOT / "README.md", render_block())
    print("Updated schema docs. Regenerate docs with: python tools/generate_schema_docs.py")


if __name__ == "__main__":
    main()
