import json
import logging
from pathlib import Path

BEST_SCORE_KEY = "2048-best-score"


class BestScoreStore:
    """
    Keep the best score as a single integer in a JSON file.

    The file holds one object, e.g. ``{"2048-best-score": 2048}``.
    """

    def __init__(
        self,
        path: Path | str,
        key: str = BEST_SCORE_KEY,
        *,
        logger: logging.Logger | None = None,
    ):
        self.path = Path(path)
        self.key = key
        self._logger = logger or logging.getLogger("merge2048")

    def load(self) -> int:
        if not self.path.exists():
            return 0

        try:
            with self.path.open(encoding="utf-8") as f:
                data = json.load(f)
            return int(data[self.key])
        except (OSError, ValueError, TypeError, KeyError) as ex:
            self._logger.warning("Ignore best score in %s: %s", self.path, ex)
            return 0

    def save(self, score: int) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        with self.path.open("w", encoding="utf-8") as f:
            json.dump({self.key: int(score)}, f)
