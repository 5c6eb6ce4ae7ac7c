"""
Pest alert bulletin parser.

Each blank-line separated block of the bulletin becomes one alert. Headline
blocks ("PEST ALERT", "BULLETIN") are skipped.
"""

import logging
import re
from typing import List

from app.models.pest import PestAlert
from app.models.provenance import Provenance
from app.parsers.base import ResponseParser, split_list, value_after_colon

logger = logging.getLogger(__name__)

BLOCK_SEPARATOR_RE = re.compile(r"\r?\n\r?\n")
ACTIONS_BLOCK_RE = re.compile(r"actions?:([\s\S]*?)(?=\n\n|\n[A-Z]|\Z)", re.IGNORECASE)

COMMON_CROPS = [
    "rice", "wheat", "cotton", "maize", "corn", "soybean", "potato", "tomato", "vegetable",
]


def detect_severity(text: str) -> str:
    lowered = text.lower()
    if any(word in lowered for word in ("severe", "high", "critical")):
        return "High"
    if any(word in lowered for word in ("moderate", "medium")):
        return "Medium"
    return "Low"


def detect_crops(text: str) -> List[str]:
    lowered = text.lower()
    found = [crop.capitalize() for crop in COMMON_CROPS if crop in lowered]
    return found or ["Multiple crops"]


def _parse_block(block: str, index: int) -> PestAlert:
    lines = block.split("\n")
    title = lines[0].strip() or f"Pest Alert {index + 1}"
    alert = PestAlert(id=f"alert_{index}", title=title)
    details: List[str] = []

    for line in lines:
        lowered = line.lower().strip()
        if "affected crops" in lowered or "crops affected" in lowered:
            alert.crops = split_list(line)
        elif "severity" in lowered or "alert level" in lowered:
            alert.severity = value_after_colon(line) or "Medium"
        elif "region" in lowered or "area" in lowered:
            alert.regions = split_list(line)
        elif "action" in lowered or "recommend" in lowered:
            action = value_after_colon(line)
            if action:
                alert.actions.append(action)
        elif "pest" in lowered and not alert.pest:
            alert.pest = value_after_colon(line)
        elif line.strip() and line.strip() != title:
            details.append(line.strip())

    alert.details = " ".join(details)
    for field in ("title", "pest", "severity", "crops", "regions", "actions", "details"):
        alert.tag_value(field, getattr(alert, field))

    # Inferred from the block's wording rather than read from a labelled line
    if not alert.severity:
        alert.severity = detect_severity(block)
        alert.tag("severity", Provenance.DEFAULT)
    if not alert.crops:
        alert.crops = detect_crops(block)
        alert.tag("crops", Provenance.DEFAULT)
    if not alert.actions:
        match = ACTIONS_BLOCK_RE.search(block)
        if match:
            alert.actions = [a.strip() for a in match.group(1).split("\n") if a.strip()]
            alert.tag_value("actions", alert.actions)

    return alert


class PestAlertParser(ResponseParser[List[PestAlert]]):
    """Block parser for pest alert bulletins."""

    def parse(self, text: str) -> List[PestAlert]:
        alerts = []
        blocks = [block for block in BLOCK_SEPARATOR_RE.split(text or "") if block]
        for index, block in enumerate(blocks):
            if "PEST ALERT" in block or "BULLETIN" in block:
                continue
            if not block.strip():
                continue
            alerts.append(_parse_block(block, index))

        logger.debug(f"Parsed {len(alerts)} pest alerts")
        return alerts


def parse_pest_alerts(text: str) -> List[PestAlert]:
    return PestAlertParser().parse(text)
