"""Survival status: OUT / COMPEL / SAFE and plays remaining."""

from __future__ import annotations

from dataclasses import dataclass

from rummystar.game.models import Thresholds
from rummystar.utils.constants import STATUS_COMPEL, STATUS_OUT, STATUS_SAFE


@dataclass(frozen=True)
class SurvivalStatus:
    total: int
    is_out: bool
    is_compel: bool
    points_remaining: int
    full_plays: int
    remainder: int
    has_compel_play: bool
    total_plays: int
    description: str
    short_status: str
    plays: str

    @property
    def label(self) -> str:
        if self.is_out:
            return STATUS_OUT
        if self.is_compel:
            return STATUS_COMPEL
        return STATUS_SAFE


def classify(total: int, thresholds: Thresholds) -> SurvivalStatus:
    """Classify a running total against the thresholds.

    Plays are counted in whole scoot points, with any leftover margin
    counted as one extra "compel" play. Cases, first match wins:

    - out: "Eliminated"
    - full plays only: "N more play left" (N P+0C)
    - full plays and a compel play: "N play + 1 compel" (N P+1C)
    - compel play only: "1 compel play left" (0P+1C)
    - no margin at all: "Next point is out"
    """
    if thresholds.scoot_point <= 0:
        raise ValueError(f"scoot_point must be >= 1, got {thresholds.scoot_point}")

    is_out = total > thresholds.out_limit
    is_compel = not is_out and total >= thresholds.compel_point
    points_remaining = max(0, thresholds.out_limit - total)

    full_plays, remainder = divmod(points_remaining, thresholds.scoot_point)
    has_compel_play = remainder > 0
    total_plays = full_plays + (1 if has_compel_play else 0)

    if is_out:
        description, short_status, plays = "Eliminated", "OUT", "0"
    elif full_plays > 0 and not has_compel_play:
        description = f"{full_plays} more play left"
        short_status = f"{full_plays}P"
        plays = f"{full_plays}P+0C"
    elif full_plays > 0:
        description = f"{full_plays} play + 1 compel"
        short_status = f"{full_plays}P + 1C"
        plays = f"{full_plays}P+1C"
    elif has_compel_play:
        description, short_status, plays = "1 compel play left", "1C", "0P+1C"
    else:
        description, short_status, plays = "Next point is out", "Next Pt", "NEXT"

    return SurvivalStatus(
        total=total,
        is_out=is_out,
        is_compel=is_compel,
        points_remaining=points_remaining,
        full_plays=full_plays,
        remainder=remainder,
        has_compel_play=has_compel_play,
        total_plays=total_plays,
        description=description,
        short_status=short_status,
        plays=plays,
    )
