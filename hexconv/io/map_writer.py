import os
from pathlib import Path
from typing import Union

from hexconv.shared.errors import ResourceError


def write_map(text: str, target: Union[str, Path]) -> Path:
    """
    Atomic Write: writes to '<target>.tmp' first, then renames over the target.
    A crash or error mid-write never leaves a half-written map behind.
    """
    target_path = Path(target)
    tmp_path = target_path.parent / f"{target_path.name}.tmp"

    try:
        target_path.parent.mkdir(parents=True, exist_ok=True)
        with open(tmp_path, "w", encoding="utf-8", newline="\n") as f:
            f.write(text)
        os.replace(tmp_path, target_path)
    except OSError as e:
        # Clean up
        if tmp_path.exists():
            try:
                tmp_path.unlink()
            except OSError:
                pass
        raise ResourceError(f"Could not write map to {target_path}: {e}") from e

    print(f"[MapWriter] Saved map: {target_path}")
    return target_path
