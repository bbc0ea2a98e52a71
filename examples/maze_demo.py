#!/usr/bin/env python3
"""
Simple demo script showing cascade and backtracking maze generation.
"""

from py_spp.core import analyze_topology, find_path, generate, path_steps
from py_spp.core.particle import Face, is_open_option, resolved_option


def draw(result, half_x, half_z):
    """Print a top-down view: '#' wall, ' ' open, '.' cell, blank outside."""
    chunk = result.resolved
    rows = []
    for z in range(-half_z, half_z + 1):
        top, mid = "", ""
        for x in range(-half_x, half_x + 1):
            cell = chunk.get((x, 0, z))
            if cell is None:
                top += "    "
                mid += "    "
                continue
            north = resolved_option(cell, Face.NEG_Z)
            west = resolved_option(cell, Face.NEG_X)
            top += "+" + ("   " if is_open_option(north) else "---")
            mid += (" " if is_open_option(west) else "|") + " . "
        rows.extend([top, mid])
    print("\n".join(rows))


def main():
    """Demonstrate both growth modes."""
    print("Py-SPP Maze Generation Demo")
    print("=" * 40)

    print("\nCascade growth (9 x 9 domain, 50 cells)")
    print("-" * 30)
    result = generate((9, 9), 50, seed="demo123")
    draw(result, 4, 4)
    stats = analyze_topology(result.resolved)
    print(f"  Cells: {stats.cells}")
    print(f"  Open edges: {stats.open_edges}")
    print(f"  Loops: {stats.cycle_rank}")
    print(f"  Dead ends: {stats.dead_ends} ({stats.dead_end_ratio:.0%})")

    goal = result.collapse_order[-1]
    path = find_path(result.resolved, (0, 0, 0), goal)
    print(f"  Path to last revealed cell {goal}: {path_steps(path)} steps")

    print("\nBacktracking growth (40 cells)")
    print("-" * 30)
    maze = generate(40, seed="demo123")
    xs = [abs(p[0]) for p in maze.collapse_order]
    zs = [abs(p[2]) for p in maze.collapse_order]
    draw(maze, max(xs), max(zs))
    stats = analyze_topology(maze.resolved)
    print(f"  Cells: {stats.cells}  Loops: {stats.cycle_rank}  Dead ends: {stats.dead_ends}")


if __name__ == "__main__":
    main()
