from __future__ import annotations

import math
from dataclasses import dataclass
from datetime import timedelta


@dataclass(frozen=True)
class RankingWeights:
    rating: float = 0.5
    keyword: float = 0.3
    recency: float = 0.2

    def __post_init__(self) -> None:
        total = self.rating + self.keyword + self.recency
        if not math.isclose(total, 1.0, abs_tol=1e-9):
            raise ValueError(f"Ranking weights must sum to 1.0, got {total}")


DEFAULT_WEIGHTS = RankingWeights()

# Neutral values used when a record lacks the data a sub-score needs
DEFAULT_RATING_SCORE = 0.5
DEFAULT_RECENCY_SCORE = 0.5
EMPTY_KEYWORD_SCORE = 1.0

# Keyword relevance per matched field
NAME_MATCH_WEIGHT = 0.5
DESCRIPTION_MATCH_WEIGHT = 0.3
ADDRESS_MATCH_WEIGHT = 0.2

RECENCY_WINDOW = timedelta(days=180)
