"""
Publisher classification: national outlet, local paper, or other.
"""
from __future__ import annotations

from typing import Optional, Tuple

from signal_engine.config import SourceConfig
from signal_engine.models import LOCAL, NATIONAL, OTHER


def _normalize(value: str) -> str:
    return " ".join(value.lower().replace("-", " ").replace("_", " ").split())


class SourceClassifier:
    """Keyword-membership classifier for news publishers."""

    def __init__(self, config: Optional[SourceConfig] = None) -> None:
        self.config = config or SourceConfig()
        self._national: Tuple[str, ...] = tuple(
            _normalize(name) for name in self.config.national_sources if name.strip()
        )
        self._local: Tuple[str, ...] = tuple(
            _normalize(word) for word in self.config.local_keywords if word.strip()
        )

    def classify(self, source_name: Optional[str]) -> str:
        """
        Classify a publisher name.

        National brands are checked before local suffix words, so a name
        carrying both ("NFL News") resolves to national.

        Args:
            source_name: Publisher display name or slug

        Returns:
            "national", "local" or "other"
        """
        if not source_name:
            return OTHER

        name = _normalize(source_name)

        if any(token in name for token in self._national):
            return NATIONAL

        if any(word in name for word in self._local):
            return LOCAL

        return OTHER


__all__ = ["SourceClassifier"]
