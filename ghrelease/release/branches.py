from __future__ import annotations

from collections.abc import Sequence

from ghrelease.release.model import Branch


def rank_branches(branches: Sequence[Branch], current: str) -> list[Branch]:
    """Order release target candidates: checked-out branch first, then shortest names.

    ``sorted`` is stable, so equal-length names keep their input order.
    """

    def key(branch: Branch) -> int:
        return 0 if branch.name == current else len(branch.name)

    return sorted(branches, key=key)
