"""Running per-dimension score totals."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class ScoreTotals:
    """Sum of the weights contributed by every answered question.

    No clamping: after N responses each total lies in [-2N, 2N].
    """

    tf: int = 0
    jp: int = 0

    def accumulate(self, weight_tf: int, weight_jp: int) -> ScoreTotals:
        return ScoreTotals(self.tf + weight_tf, self.jp + weight_jp)
