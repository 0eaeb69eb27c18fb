import argparse
from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Self

from merge2048.spawn import TWO_PROB
from merge2048.terminal import WIN_VALUE


@dataclass
class GameConfig:
    two_prob: float = TWO_PROB
    win_value: int = WIN_VALUE
    seed: Optional[int] = None
    best_score_path: Optional[Path] = None

    @classmethod
    def parser(cls) -> argparse.ArgumentParser:
        p = argparse.ArgumentParser()
        p.add_argument("--seed", type=int, default=None)
        p.add_argument("--two-prob", type=float, default=TWO_PROB)
        p.add_argument("--win-value", type=int, default=WIN_VALUE)
        p.add_argument("--best-score", type=Path, default=None)
        p.add_argument("--log-level", default="WARNING")
        p.add_argument("--log-file", type=Path, default=None)
        return p

    @classmethod
    def from_namespace(cls, ns: argparse.Namespace) -> Self:
        return cls(
            two_prob=ns.two_prob,
            win_value=ns.win_value,
            seed=ns.seed,
            best_score_path=ns.best_score,
        )
