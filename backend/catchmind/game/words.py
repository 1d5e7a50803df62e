from __future__ import annotations

import random
from typing import Mapping, Sequence


DEFAULT_CATEGORY = "food"

WORD_POOL: dict[str, list[str]] = {
    "food": ["사과", "바나나", "피자", "햄버거"],
    "animal": ["고양이", "강아지"],
    "object": ["집", "자동차", "별", "구름", "컵", "책"],
}


class WordProvider:
    """Picks secret words from a category table.

    Unknown category keys fall back to ``default_category``.
    """

    def __init__(
        self,
        pool: Mapping[str, Sequence[str]] | None = None,
        default_category: str = DEFAULT_CATEGORY,
        rng: random.Random | None = None,
    ) -> None:
        self.pool = dict(pool if pool is not None else WORD_POOL)
        if default_category not in self.pool:
            raise ValueError(f"default category {default_category!r} has no word list")
        self.default_category = default_category
        self._rng = rng or random.Random()

    def categories(self) -> list[str]:
        return list(self.pool.keys())

    def words_for(self, category: str) -> Sequence[str]:
        return self.pool.get(category) or self.pool[self.default_category]

    def pick(self, category: str) -> str:
        return self._rng.choice(list(self.words_for(category)))
