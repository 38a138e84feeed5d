"""
Utility functions for texture dedup integration gates.

Provides:
- Synthetic texture generation with known prototype placement
- Receipt generation and saving
- Summary statistics
"""

import json
import random
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple

import numpy as np

from tex_core.orientation import apply_orientation


def random_tile(rng: np.random.Generator, tile_size: int) -> np.ndarray:
    """Opaque random RGBA tile (asymmetric with overwhelming probability)."""
    tile = rng.integers(0, 256, size=(tile_size, tile_size, 4), dtype=np.uint8)
    tile[..., 3] = 255
    return tile


def synthesize_texture(
    cols: int,
    rows: int,
    tile_size: int,
    num_prototypes: int,
    seed: Optional[int] = None,
    margin: Tuple[int, int] = (0, 0),
) -> Tuple[np.ndarray, List[int]]:
    """
    Build a texture sheet from randomly oriented copies of a few prototypes.

    Args:
        cols, rows: Grid dimensions
        tile_size: Tile edge length
        num_prototypes: Number of distinct random tiles to draw from
        seed: Optional seed for reproducibility
        margin: Extra (width, height) pixels appended as a partial column/row

    Returns:
        (image, placement) where placement[i] is the prototype id of cell i
    """
    rng = np.random.default_rng(seed)
    picker = random.Random(seed)
    prototypes = [random_tile(rng, tile_size) for _ in range(num_prototypes)]

    width = cols * tile_size + margin[0]
    height = rows * tile_size + margin[1]
    image = rng.integers(0, 256, size=(height, width, 4), dtype=np.uint8)
    image[..., 3] = 255

    placement = []
    for y in range(rows):
        for x in range(cols):
            proto_id = picker.randrange(num_prototypes)
            code = picker.randrange(8)
            tile = apply_orientation(prototypes[proto_id], code)
            image[y * tile_size:(y + 1) * tile_size, x * tile_size:(x + 1) * tile_size] = tile
            placement.append(proto_id)

    return image, placement


def build_receipt(
    case_id: str,
    gate: str,
    dedup_data: Optional[Dict[str, Any]] = None,
    status: str = "PASS",
    error: Optional[str] = None,
) -> Dict[str, Any]:
    """
    Build a receipt dictionary for one gate case.

    Args:
        case_id: Case identifier
        gate: Gate name
        dedup_data: DedupReceipt fields plus gate checks
        status: "PASS" or "FAIL"
        error: Error message if status is FAIL

    Returns:
        Receipt dictionary
    """
    receipt = {
        "case_id": case_id,
        "gate": gate,
        "timestamp": datetime.now().isoformat(),
        "status": status,
    }

    if dedup_data is not None:
        receipt["dedup"] = dedup_data

    if error is not None:
        receipt["error"] = error

    return receipt


def save_receipt(receipt: Dict[str, Any], output_dir: Path) -> None:
    """Save receipt to <output_dir>/<case_id>.json."""
    output_dir.mkdir(parents=True, exist_ok=True)
    receipt_file = output_dir / f"{receipt['case_id']}.json"

    with open(receipt_file, "w") as f:
        json.dump(receipt, f, indent=2)


def compute_summary_stats(receipts: List[Dict[str, Any]]) -> Dict[str, Any]:
    """Pass/fail counts plus average dedup ratio over passing cases."""
    total = len(receipts)
    passed = sum(1 for r in receipts if r["status"] == "PASS")

    stats = {
        "total_cases": total,
        "passed": passed,
        "failed": total - passed,
        "pass_rate": passed / total if total > 0 else 0.0,
    }

    ratios = [
        r["dedup"]["unique"] / r["dedup"]["cells"]
        for r in receipts
        if "dedup" in r and r["dedup"].get("cells")
    ]
    if ratios:
        stats["avg_unique_ratio"] = sum(ratios) / len(ratios)

    return stats
