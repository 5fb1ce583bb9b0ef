"""Anchor-based text patching.

Generated code is inserted next to a literal marker string (the anchor)
in an existing file. The anchor itself is left in place so later calls can
insert again. Inserting the same block twice produces two copies.
"""
from __future__ import annotations
import logging
from dataclasses import dataclass
from enum import Enum
from pathlib import Path

from unity_lua_mcp.errors import AnchorNotFoundError, TargetFileNotFoundError

logger = logging.getLogger(__name__)


class AnchorPosition(str, Enum):
    BEFORE = "before"
    AFTER = "after"


@dataclass(frozen=True)
class AnchorPatch:
    """A planned edit: the file's current text and its replacement."""
    path: Path
    anchor: str
    original: str
    updated: str

    def apply(self) -> None:
        # newline="" keeps the file's own line endings
        with open(self.path, "w", encoding="utf-8", newline="") as f:
            f.write(self.updated)
        logger.debug(f"Patched {self.path} at anchor {self.anchor!r}")


def read_text(path: Path) -> str:
    with open(path, "r", encoding="utf-8", newline="") as f:
        return f.read()


def plan_anchor_patch(
    path: str | Path,
    anchor: str,
    block: str,
    position: AnchorPosition = AnchorPosition.BEFORE,
) -> AnchorPatch:
    """Compute the insertion of ``block`` next to the first ``anchor``.

    Nothing is written; call ``apply()`` on the result.

    Raises:
        TargetFileNotFoundError: If the file does not exist
        AnchorNotFoundError: If the anchor is not present verbatim
    """
    path = Path(path)
    if not path.is_file():
        raise TargetFileNotFoundError(path)

    original = read_text(path)
    index = original.find(anchor)
    if index < 0:
        raise AnchorNotFoundError(path, anchor)

    if position is AnchorPosition.BEFORE:
        cut = index
    else:
        cut = index + len(anchor)

    updated = original[:cut] + block + original[cut:]
    return AnchorPatch(path=path, anchor=anchor, original=original, updated=updated)


def insert_at_anchor(
    path: str | Path,
    anchor: str,
    block: str,
    position: AnchorPosition = AnchorPosition.BEFORE,
) -> AnchorPatch:
    """Insert ``block`` next to ``anchor`` in ``path`` and write the file."""
    patch = plan_anchor_patch(path, anchor, block, position)
    patch.apply()
    return patch
