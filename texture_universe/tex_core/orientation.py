"""
Tile orientations: the 8 combinations of horizontal mirror and quarter turns.

Provides:
- rotate90 / rotate180 / rotate270: counter-clockwise quarter turns
- mirror: flip across the vertical axis (left-right)
- variants(tile): all 8 orientations, index == OrientationCode
- apply_orientation / invert_orientation: forward and inverse of one code
- orientation_label: human-readable name of a code

Orientation code layout is 00000mrr:
- m  (bit 2): mirrored horizontally
- rr (bits 1-0): quarter turns applied to the mirrored-or-original tile

All functions are pure and return new arrays.
"""

from typing import Callable, List

import numpy as np

from .types import OrientationCode, Tile

MIRROR_BIT = 0b100
ROTATION_MASK = 0b011
NUM_ORIENTATIONS = 8


# ==============================================================================
# Elementary transforms
# ==============================================================================

def rotate90(tile: Tile) -> Tile:
    """
    Rotate 90° counter-clockwise.

    result[y'][x'] = tile[x'][W-1-y']
    """
    return np.rot90(tile, k=1, axes=(0, 1)).copy()


def rotate180(tile: Tile) -> Tile:
    """Rotate 180°."""
    return np.rot90(tile, k=2, axes=(0, 1)).copy()


def rotate270(tile: Tile) -> Tile:
    """Rotate 270° counter-clockwise (= 90° clockwise)."""
    return np.rot90(tile, k=3, axes=(0, 1)).copy()


def mirror(tile: Tile) -> Tile:
    """Flip across the vertical axis (left-right)."""
    return tile[:, ::-1].copy()


def _identity(tile: Tile) -> Tile:
    return np.array(tile, copy=True)


ROTATIONS: List[Callable[[Tile], Tile]] = [_identity, rotate90, rotate180, rotate270]


# ==============================================================================
# Orientation codes
# ==============================================================================

ORIENTATION_LABELS = (
    "Standard",
    "Rotated 90°",
    "Rotated 180°",
    "Rotated 270°",
    "Mirrored",
    "Mirrored+Rotated 90°",
    "Mirrored+Rotated 180°",
    "Mirrored+Rotated 270°",
)


def is_mirrored(code: int) -> bool:
    return bool(code & MIRROR_BIT)


def quarter_turns(code: int) -> int:
    return code & ROTATION_MASK


def orientation_label(code: int) -> str:
    """
    Label for an orientation code; only the low 3 bits are significant.

    Examples:
        >>> orientation_label(0)
        'Standard'
        >>> orientation_label(5)
        'Mirrored+Rotated 90°'
    """
    return ORIENTATION_LABELS[code & 0x7]


def _check_code(code: int) -> None:
    if not 0 <= code < NUM_ORIENTATIONS:
        raise ValueError(f"Orientation code must be in 0..7, got {code}")


def apply_orientation(tile: Tile, code: int) -> Tile:
    """
    Forward transform of one orientation: mirror (if m), then rotate rr turns.

    apply_orientation(tile, i) equals variants(tile)[i].

    Raises:
        ValueError: If code is outside 0..7
    """
    _check_code(code)
    base = mirror(tile) if is_mirrored(code) else tile
    return ROTATIONS[quarter_turns(code)](base)


def invert_orientation(tile: Tile, code: int) -> Tile:
    """
    Inverse transform: undo the rotation, then undo the mirror.

    invert_orientation(apply_orientation(t, i), i) reproduces t exactly.

    Raises:
        ValueError: If code is outside 0..7
    """
    _check_code(code)
    turns = quarter_turns(code)
    unrotated = ROTATIONS[(4 - turns) % 4](tile)
    return mirror(unrotated) if is_mirrored(code) else unrotated


def variants(tile: Tile) -> List[Tile]:
    """
    All 8 orientations of a tile, index i corresponding to OrientationCode i.

    0 identity, 1-3 rotations of the original, 4 mirror,
    5-7 rotations of the mirror.

    Returns:
        List of 8 new arrays (index 0 is a copy of the input)
    """
    mirrored = mirror(tile)
    result = [rotate(tile) for rotate in ROTATIONS]
    result.append(mirrored)
    result.extend(rotate(mirrored) for rotate in ROTATIONS[1:])
    return result


def orientation_codes() -> List[OrientationCode]:
    """All codes in the fixed scan order 0..7."""
    return [OrientationCode(i) for i in range(NUM_ORIENTATIONS)]
