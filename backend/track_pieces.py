"""
Track piece connection table.

Each piece connects to a subset of the four compass directions. The subset is
stored as a bitmask, one bit per direction. Piece names match the icon file
names (without extension) the editor sends in a grid update.
"""

from enum import IntFlag
from typing import Dict, List


class Direction(IntFlag):
    NORTH = 1
    SOUTH = 2
    EAST = 4
    WEST = 8


# Order here = order in GET /api/pieces
TRACK_PIECES: Dict[str, Direction] = {
    "straight": Direction.NORTH | Direction.SOUTH,
    "curve": Direction.NORTH | Direction.EAST,
    "t_junction": Direction.NORTH | Direction.EAST | Direction.WEST,
    "cross": Direction.NORTH | Direction.SOUTH | Direction.EAST | Direction.WEST,
    "end": Direction.NORTH,
}


def get_connections(name: str) -> Direction:
    if name not in TRACK_PIECES:
        raise KeyError(f"Unknown track piece: {name}. Available: {list(TRACK_PIECES.keys())}")
    return TRACK_PIECES[name]


def direction_names(mask: Direction) -> List[str]:
    """Names of the directions set in mask, in NORTH, SOUTH, EAST, WEST order."""
    return [d.name for d in Direction if d in mask]


def list_pieces() -> List[Dict]:
    return [
        {
            "name": name,
            "connections": direction_names(mask),
            "mask": int(mask),
        }
        for name, mask in TRACK_PIECES.items()
    ]
