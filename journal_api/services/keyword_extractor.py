# journal_api/services/keyword_extractor.py

import re
from collections import Counter
from typing import Iterable

STOP_WORDS = frozenset(
    """
    これ それ あれ この その あの ここ そこ あそこ
    こちら どこ だれ なに なん 何 私 僕 俺
    あなた みんな それで そして しかし でも
    ある いる する なる できる わかる
    です ます ません でした ました
    から まで より ため ので けど ても
    という こと もの ところ
    の を に へ と で や が は も
    """.split()
)

_SEPARATORS = re.compile(r"[。、！？!?\n]")
_NUMERIC = re.compile(r"^\d+$")


class KeywordExtractor:
    def __init__(self, *, min_length: int = 2, max_keywords: int = 10) -> None:
        self._min_length = min_length
        self._max_keywords = max_keywords

    def extract(self, text: str | None) -> list[dict]:
        if not text or not text.strip():
            return []

        words = [w for w in self._tokenize(text) if self._is_keyword(w)]
        if not words:
            return []

        counts = Counter(words)
        total = sum(counts.values())

        # Counter.most_common mantém a ordem de primeira ocorrência nos empates
        return [
            {"word": word, "count": count, "percentage": round(count / total * 100, 1)}
            for word, count in counts.most_common(self._max_keywords)
        ]

    def extract_from_texts(self, texts: Iterable[str]) -> list[dict]:
        return self.extract(" ".join(t for t in texts if t))

    def _tokenize(self, text: str) -> list[str]:
        return [w.strip() for w in _SEPARATORS.sub(" ", text).split() if w.strip()]

    def _is_keyword(self, word: str) -> bool:
        if len(word) < self._min_length:
            return False
        if word in STOP_WORDS:
            return False
        return not _NUMERIC.match(word)
