"""Shared helpers for integration tests."""

from __future__ import annotations

import os
from pathlib import Path


def snapshot_tree(root: Path) -> dict[str, str]:
    """Capture every entry under *root* as ``{relative_path: content}``.

    Symlinks are recorded by their target relative to *root* so snapshots of
    different output directories compare equal.
    """
    tree: dict[str, str] = {}
    for path in sorted(root.rglob("*")):
        relative = str(path.relative_to(root))
        if path.is_symlink():
            target = Path(os.readlink(path))
            if target.is_absolute() and target.is_relative_to(root):
                target = target.relative_to(root)
            tree[relative] = f"-> {target}"
        elif path.is_file():
            tree[relative] = path.read_text(encoding="utf-8")
    return tree
