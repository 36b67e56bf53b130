import sys
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[1]
DEFAULT_SCENES_PATH = REPO_ROOT / "world" / "scenes.json"

if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))

from descent.catalog import Catalog, LoadError, load_catalog


def build_graph(catalog: Catalog) -> dict:
    graph = {scene.id: [] for scene in catalog}
    for scene in catalog:
        for option in scene.options:
            if option.destination in catalog and option.destination not in graph[scene.id]:
                graph[scene.id].append(option.destination)
    return graph


def traverse_from(start_scene: str, graph: dict) -> set:
    if start_scene not in graph:
        return set()
    visited = set()
    stack = [start_scene]
    while stack:
        current = stack.pop()
        if current in visited:
            continue
        visited.add(current)
        stack.extend(graph.get(current, []))
    return visited


def find_unreachable(catalog: Catalog) -> list:
    graph = build_graph(catalog)
    reached = traverse_from(catalog.first_scene_id(), graph)
    return sorted(set(graph.keys()) - reached)


def main() -> None:
    scenes_path = Path(sys.argv[1]) if len(sys.argv) > 1 else DEFAULT_SCENES_PATH
    try:
        catalog = load_catalog(scenes_path)
    except LoadError as exc:
        print(exc)
        sys.exit(1)
    unreachable = find_unreachable(catalog)

    print(f"Scenes file: {scenes_path}")
    print(f"Total scenes: {len(catalog)}")
    print(f"Reachable scenes: {len(catalog) - len(unreachable)}")
    if unreachable:
        print("Unreachable scenes:")
        for scene_id in unreachable:
            print(f"  - {scene_id}")
    else:
        print(f"All scenes reachable from '{catalog.first_scene_id()}'.")


if __name__ == "__main__":
    main()
