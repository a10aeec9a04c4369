"""\
Example Output Validation Script

This script validates that the TileRenderer examples produced reasonable output.

Checks:
- PNG tile files exist and exceed a minimum size threshold
- Each file starts with the PNG signature
- The API render and the staged render have identical pixels

Usage:
  python examples/basic_tile.py
  python examples/validate_output.py
"""

from __future__ import annotations

from pathlib import Path

import matplotlib.image as mpimg
import numpy as np

PNG_SIGNATURE = b"\x89PNG\r\n\x1a\n"


def _check_file(path: Path, min_bytes: int) -> tuple[bool, str]:
    if not path.exists():
        return False, f"MISSING: {path}"
    size = path.stat().st_size
    if size < min_bytes:
        return False, f"TOO SMALL: {path} ({size} bytes < {min_bytes})"
    with path.open("rb") as f:
        if f.read(len(PNG_SIGNATURE)) != PNG_SIGNATURE:
            return False, f"NOT PNG?: {path} (bad signature)"
    return True, f"OK: {path} ({size/1024:.1f} KB)"


def _same_pixels(first: Path, second: Path) -> tuple[bool, str]:
    a = mpimg.imread(str(first))
    b = mpimg.imread(str(second))
    if a.shape != b.shape:
        return False, f"SIZE MISMATCH: {a.shape[1]}x{a.shape[0]} vs {b.shape[1]}x{b.shape[0]}"
    if not np.array_equal(a, b):
        return False, "PIXELS DIFFER between API and staged render"
    return True, f"OK: identical {a.shape[1]}x{a.shape[0]} tiles"


def main() -> int:
    root = Path(__file__).resolve().parents[1]
    output = root / "output"

    api_tile = output / "basic_tile.png"
    staged_tile = output / "staged_tile.png"

    print("Validating TileRenderer example outputs")
    print("=" * 60)

    ok_all = True

    print("\nTiles:")
    for p in (api_tile, staged_tile):
        ok, msg = _check_file(p, min_bytes=2_000)
        print(f"  {msg}")
        ok_all = ok_all and ok

    print("\nConsistency:")
    if ok_all:
        ok, msg = _same_pixels(api_tile, staged_tile)
        print(f"  {msg}")
        ok_all = ok_all and ok
    else:
        print("  SKIPPED: tiles missing")

    print("\nSummary:")
    if ok_all:
        print("  SUCCESS: All expected outputs look reasonable")
        return 0

    print("  FAIL: One or more outputs missing/invalid")
    return 1


if __name__ == "__main__":
    raise SystemExit(main())
