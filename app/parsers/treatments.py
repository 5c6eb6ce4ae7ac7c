"""
Treatment recommendation parser.

Groups the answer to the treatment prompt into organic, chemical, preventive
and IPM recommendations. Each category is located independently by its
keywords, so overlapping captures are possible and deduplicated at the end.
"""

import logging
import re
from typing import Dict, List

from app.models.pest import TreatmentSet
from app.parsers.base import ResponseParser, dedupe, strip_bullet

logger = logging.getLogger(__name__)

TREATMENT_KEYWORDS: Dict[str, List[str]] = {
    "organic": ["organic control", "natural", "biological"],
    "chemical": ["chemical control", "pesticides", "insecticides"],
    "preventive": ["preventive", "prevention", "resistant varieties", "crop rotation"],
    "ipm": ["integrated pest management", "ipm", "combined strategies"],
}


def _block_pattern(keyword: str) -> re.Pattern:
    # From the keyword up to the next "N." marker or the end of the text
    return re.compile(rf"({re.escape(keyword)}[\s\S]*?)(?=\d+\.|\Z)", re.IGNORECASE)


BLOCK_PATTERNS = {
    category: [(keyword, _block_pattern(keyword)) for keyword in keywords]
    for category, keywords in TREATMENT_KEYWORDS.items()
}


class TreatmentRecommendationParser(ResponseParser[TreatmentSet]):
    """Keyword-block parser for treatment recommendations."""

    def is_empty(self, result: TreatmentSet) -> bool:
        return not (result.organic or result.chemical or result.preventive or result.ipm)

    def parse(self, text: str) -> TreatmentSet:
        text = text or ""
        treatments: Dict[str, List[str]] = {category: [] for category in TREATMENT_KEYWORDS}

        for category, patterns in BLOCK_PATTERNS.items():
            keywords = TREATMENT_KEYWORDS[category]
            for _, pattern in patterns:
                match = pattern.search(text)
                if not match:
                    continue
                for line in match.group(1).strip().split("\n"):
                    lowered = line.lower()
                    if not line.strip() or any(k in lowered for k in keywords):
                        continue
                    treatments[category].append(strip_bullet(line))

        result = TreatmentSet(**{key: dedupe(items) for key, items in treatments.items()})
        for category in TREATMENT_KEYWORDS:
            result.tag_value(category, getattr(result, category))

        logger.debug(
            "Parsed treatments: "
            + ", ".join(f"{k}={len(getattr(result, k))}" for k in TREATMENT_KEYWORDS)
        )
        return result


def parse_treatment_recommendations(text: str) -> TreatmentSet:
    return TreatmentRecommendationParser().parse(text)
