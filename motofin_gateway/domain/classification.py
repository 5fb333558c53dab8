"""Category classifier - maps free-text buyer interest to the official vehicle taxonomy"""

import logging
from typing import Dict, Iterable, List, Mapping, Optional

from motofin_gateway.domain.matching import levenshtein_distance
from motofin_gateway.domain.models import ClassificationResult, MatchMethod

logger = logging.getLogger(__name__)

DEFAULT_THRESHOLD = 0.6


class CategoryClassifier:
    """
    Resolve a query in three passes:

    1. Exact synonym lookup (score 1, method synonym)
    2. Taxonomy labels: distance 0 returns immediately (score 1, method exact),
       otherwise the label with the smallest edit distance is kept; on equal
       distance the earlier label stays, whatever its length
    3. Synonym terms, fuzzy; a candidate replaces the best only with a strictly
       higher score, so the taxonomy candidate wins ties

    The best fuzzy candidate is returned only when its score is above the threshold.
    Empty or whitespace-only queries never match.
    """

    def __init__(
        self,
        taxonomy: Iterable[str],
        synonyms: Mapping[str, str],
        threshold: float = DEFAULT_THRESHOLD,
    ):
        self.taxonomy: List[str] = list(taxonomy)
        self.threshold = threshold

        if len(set(self.taxonomy)) != len(self.taxonomy):
            raise ValueError("Taxonomy labels must be unique")
        for label in self.taxonomy:
            if label != label.upper():
                raise ValueError(f"Taxonomy label must be upper-case: {label!r}")

        canonical = {label.lower() for label in self.taxonomy}
        self.synonyms: Dict[str, str] = {}
        for term, category in synonyms.items():
            if category not in self.taxonomy:
                raise ValueError(f"Synonym {term!r} maps to unknown category {category!r}")
            key = term.lower().strip()
            # Canonical labels resolve through the exact pass
            if key in canonical:
                continue
            self.synonyms[key] = category

    def classify(self, query: str) -> Optional[ClassificationResult]:
        normalized = query.lower().strip()
        if not normalized:
            return None

        if normalized in self.synonyms:
            return ClassificationResult(self.synonyms[normalized], 1.0, MatchMethod.SYNONYM)

        best: Optional[ClassificationResult] = None
        min_dist: Optional[int] = None

        for label in self.taxonomy:
            dist = levenshtein_distance(normalized, label.lower())
            if dist == 0:
                return ClassificationResult(label, 1.0, MatchMethod.EXACT)

            if min_dist is None or dist < min_dist:
                min_dist = dist
                score = 1 - dist / max(len(normalized), len(label))
                best = ClassificationResult(label, score, MatchMethod.FUZZY)

        for term, category in self.synonyms.items():
            dist = levenshtein_distance(normalized, term)
            score = 1 - dist / max(len(normalized), len(term))
            if best is None or score > best.score:
                best = ClassificationResult(category, score, MatchMethod.FUZZY)

        if best is not None and best.score > self.threshold:
            return best

        logger.debug("No category match", extra={"query": normalized})
        return None
