"""
Lexicon-based sentiment scoring.

Texts are scored with the AFINN-165 word list: every token contributes its
integer weight, a preceding negator flips that weight, and the sum is the
polarity score. The scorer is deterministic and holds no per-call state, so a
single instance can be shared by every pipeline.
"""
from __future__ import annotations

import logging
import re
from functools import lru_cache
from typing import Dict, List, Mapping, Optional

from signal_engine.config import SentimentConfig
from signal_engine.models import SentimentResult

logger = logging.getLogger(__name__)

_STRIP_RE = re.compile(r"[.,/#!?$%^&*;:{}=_`\"~()\[\]<>|\\+]")


@lru_cache(maxsize=1)
def _load_afinn() -> Dict[str, int]:
    """
    Load the AFINN-165 English word list.

    Only the word-to-weight table is used. Afinn.score() searches words inside
    a token, so "win-win" would count "win" twice; tokens are looked up whole.

    Returns:
        Mapping of lowercase word to integer weight

    Raises:
        RuntimeError: If the afinn package is not installed
    """
    try:
        from afinn import Afinn
    except ImportError as e:
        raise RuntimeError(
            "Sentiment lexicon is missing. Install it with: pip install afinn"
        ) from e

    logger.debug("Loading AFINN-165 lexicon")
    return {word: int(weight) for word, weight in Afinn(language="en")._dict.items()}


def sentiment_label(score: float) -> str:
    """
    Map a polarity score (or a mean of scores) to its qualitative label.

    The sign of the value decides the side; exactly zero is Neutral.
    """
    if score > 2:
        return "Very Positive"
    if score > 0:
        return "Positive"
    if score == 0:
        return "Neutral"
    if score > -2:
        return "Negative"
    return "Very Negative"


def tokenize(text: str) -> List[str]:
    """Lowercase, delete punctuation except apostrophes and hyphens, split on whitespace."""
    cleaned = _STRIP_RE.sub("", text.lower())
    return cleaned.split()


class SentimentScorer:
    """Scores text polarity against a word lexicon."""

    def __init__(
        self,
        config: Optional[SentimentConfig] = None,
        lexicon: Optional[Mapping[str, int]] = None,
    ) -> None:
        """
        Args:
            config: Negation settings; defaults to the built-in English negators
            lexicon: Word weights to use instead of AFINN-165 (test doubles,
                domain vocabularies)
        """
        self.config = config or SentimentConfig()
        self._lexicon = lexicon

    def _weight(self, token: str) -> int:
        lexicon = self._lexicon if self._lexicon is not None else _load_afinn()
        return int(lexicon.get(token, 0))

    def score(self, text: Optional[str]) -> SentimentResult:
        """
        Score a text.

        Args:
            text: Text to analyze; None and empty strings are Neutral

        Returns:
            SentimentResult with integer score, comparative (score per token)
            and label
        """
        if not text or not isinstance(text, str):
            return SentimentResult(score=0, comparative=0.0, label="Neutral")

        tokens = tokenize(text)
        if not tokens:
            return SentimentResult(score=0, comparative=0.0, label="Neutral")

        negators = self.config.negators
        total = 0
        positive: List[str] = []
        negative: List[str] = []

        for index, token in enumerate(tokens):
            weight = self._weight(token)
            if weight == 0:
                continue
            if index > 0 and tokens[index - 1] in negators:
                weight = -weight
            total += weight
            if weight > 0:
                positive.append(token)
            else:
                negative.append(token)

        return SentimentResult(
            score=total,
            comparative=total / len(tokens),
            label=sentiment_label(total),
            tokens=len(tokens),
            positive_words=tuple(positive),
            negative_words=tuple(negative),
        )


__all__ = ["SentimentScorer", "sentiment_label", "tokenize"]
