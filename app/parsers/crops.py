"""
Crop recommendation parser.

Expects a numbered list where each item is followed by "- Label: value"
lines, which is the format the crop recommendation prompt asks for:

    1. Rice
       - Growing Season: Kharif
       - Water Requirement: high
"""

import logging
import re
from typing import List

from app.models.crop import CropRecommendation
from app.models.provenance import Provenance
from app.parsers.base import ResponseParser, clean_text, pseudo_id

logger = logging.getLogger(__name__)

ITEM_DELIMITER_RE = re.compile(r"\d+\.\s+")

# Checked in order, first match wins
CROP_LABELS = [
    ("Growing Season:", "season"),
    ("Water Requirement:", "water_requirement"),
    ("Temperature Range:", "temperature"),
    ("Soil Requirement:", "soil_type"),
    ("Growing Duration:", "duration"),
    ("Expected Yield:", "expected_yield"),
    ("Key Benefits:", "benefits"),
]


def _value_after_label(line: str, label: str) -> str:
    return clean_text(line.replace(label, "", 1))


def _parse_section(section: str) -> CropRecommendation | None:
    lines = [line for line in section.strip().split("\n") if line.strip()]
    if not lines:
        return None

    name = clean_text(re.sub(r"[\[\]]", "", lines[0]))
    values = {field: "" for _, field in CROP_LABELS}

    for line in lines[1:]:
        line = re.sub(r"^-\s+", "", line.strip())
        for label, field in CROP_LABELS:
            if label in line:
                values[field] = _value_after_label(line, label)
                break

    crop = CropRecommendation(id=pseudo_id("crop", name), name=name, **values)
    crop.tag("name", Provenance.EXTRACTED)
    for field, value in values.items():
        crop.tag_value(field, value)
    return crop


class CropRecommendationParser(ResponseParser[List[CropRecommendation]]):
    """Numbered-list crop recommendation parser."""

    def parse(self, text: str) -> List[CropRecommendation]:
        sections = ITEM_DELIMITER_RE.split(text or "")
        # Anything before the first "1. " is a preamble, not a crop;
        # text with no numbered item at all holds no crops
        sections = sections[1:]

        crops = []
        for section in sections:
            crop = _parse_section(section)
            if crop is not None:
                crops.append(crop)

        logger.debug(f"Parsed {len(crops)} crop recommendations")
        return crops


def parse_crop_recommendations(text: str) -> List[CropRecommendation]:
    return CropRecommendationParser().parse(text)
