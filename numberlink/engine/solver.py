"""CP-SAT puzzle solver using OR-Tools.

The board is modelled as a circuit over the cells plus one extra node that
closes the loop: the extra node feeds anchor 1 and is fed by the last anchor,
so the remaining arcs form a Hamiltonian path between them. Each cell carries
its step index on that path; arcs tie consecutive indices together and the
anchors are required to appear in increasing order.
"""

from __future__ import annotations

from typing import Dict, List, Optional, Sequence

from ortools.sat.python import cp_model

from ..core.exceptions import SolverError
from ..core.models import Coordinate, Line, SolutionPath
from ..utils.logger import get_logger
from .grid import PuzzleGrid

LOGGER = get_logger(__name__)


def solve_puzzle(grid: PuzzleGrid, timeout: float = 10.0) -> Optional[SolutionPath]:
    """Find a path through every cell visiting the anchors in order.

    Args:
        grid: PuzzleGrid with its anchors placed.
        timeout: Solver time limit in seconds.

    Returns:
        The solution path, or None if the board is infeasible or the solver
        ran out of time.
    """
    anchors = grid.anchors()
    if not anchors:
        raise SolverError("Grid has no anchors to connect")

    cells = list(grid.coordinates())
    total = len(cells)
    if total == 1:
        return (cells[0],)

    model = cp_model.CpModel()
    index: Dict[Coordinate, int] = {cell: i for i, cell in enumerate(cells)}
    position = {
        cell: model.new_int_var(0, total - 1, f"pos_{cell.row}_{cell.col}")
        for cell in cells
    }

    # ------------------------------------------------------------------
    # Step 1: Arcs between orthogonal neighbours
    # ------------------------------------------------------------------
    arcs = []
    for cell in cells:
        for neighbor in cell.neighbors():
            if not grid.contains(neighbor):
                continue
            arc = model.new_bool_var(
                f"arc_{cell.row}_{cell.col}_{neighbor.row}_{neighbor.col}"
            )
            arcs.append((index[cell], index[neighbor], arc))
            model.add(position[neighbor] == position[cell] + 1).only_enforce_if(arc)

    # ------------------------------------------------------------------
    # Step 2: Close the circuit through the endpoints
    # ------------------------------------------------------------------
    closing = total
    first, last = anchors[0].coord, anchors[-1].coord
    arcs.append((closing, index[first], model.new_bool_var("enter")))
    arcs.append((index[last], closing, model.new_bool_var("leave")))
    model.add_circuit(arcs)
    model.add(position[first] == 0)
    model.add(position[last] == total - 1)
    model.add_all_different(list(position.values()))

    # ------------------------------------------------------------------
    # Step 3: Anchor order
    # ------------------------------------------------------------------
    for before, after in zip(anchors, anchors[1:]):
        model.add(position[after.coord] > position[before.coord])

    solver = cp_model.CpSolver()
    solver.parameters.max_time_in_seconds = timeout
    solver.parameters.num_workers = 4

    LOGGER.info(
        "CP-SAT: %dx%d grid, %d anchors, solving (timeout=%0.1fs)...",
        grid.size, grid.size, len(anchors), timeout,
    )
    status = solver.solve(model)
    if status not in (cp_model.OPTIMAL, cp_model.FEASIBLE):
        LOGGER.warning("CP-SAT: no solution found (status=%s)", solver.status_name(status))
        return None

    LOGGER.info("CP-SAT: solution found in %.2fs", solver.wall_time)
    return tuple(sorted(cells, key=lambda cell: solver.value(position[cell])))


def split_into_lines(path: Sequence[Coordinate], grid: PuzzleGrid) -> List[Line]:
    """Cut a solution path into one line per consecutive anchor pair."""
    if not path:
        return []
    if grid.anchor_at(path[0]) != 1:
        raise SolverError("Path does not start on anchor 1")

    lines: List[Line] = []
    current = Line(start_anchor=1, points=[path[0]])
    for coord in path[1:]:
        current.points.append(coord)
        anchor = grid.anchor_at(coord)
        if anchor is None:
            continue
        if anchor != current.target_anchor:
            raise SolverError(
                f"Path reaches anchor {anchor} while drawing from {current.start_anchor}"
            )
        lines.append(current)
        current = Line(start_anchor=anchor, points=[coord])
    return lines
