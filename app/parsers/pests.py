"""
Pest information parser.

The answer to the pest identification prompt is a numbered list of pests,
each followed by loosely formatted paragraphs (scientific name, description,
symptoms, control methods). Lines are dispatched by a small state machine:
header lines switch the active section, every other line is appended to it.
"""

import logging
import re
from enum import Enum
from typing import Callable, List, Optional, Tuple

from app.models.pest import ControlMethods, PestInfo
from app.models.provenance import Provenance
from app.parsers.base import ResponseParser, clean_text, pseudo_id, value_after_colon

logger = logging.getLogger(__name__)

NUMBERED_LINE_RE = re.compile(r"^\d+\.?\s+(.+)$")


class PestSection(str, Enum):
    IDLE = "idle"
    NAME = "name"
    SCIENTIFIC = "scientific"
    DESCRIPTION = "description"
    SYMPTOMS = "symptoms"
    CONTROL = "control"


class UnclassifiedControlPolicy(str, Enum):
    """Where control lines mentioning neither organic nor chemical go."""

    BALANCE = "balance"  # into whichever bucket has fewer entries
    DROP = "drop"


def _has_any(*keywords: str) -> Callable[[str], bool]:
    return lambda lowered: any(keyword in lowered for keyword in keywords)


# (predicate on the lowercased line, target section), in priority order.
# The numbered-line transition is handled before this table.
TRANSITIONS: List[Tuple[Callable[[str], bool], PestSection]] = [
    (_has_any("scientific name"), PestSection.SCIENTIFIC),
    (_has_any("description", "appearance"), PestSection.DESCRIPTION),
    (_has_any("symptoms"), PestSection.SYMPTOMS),
    (_has_any("control", "treatment"), PestSection.CONTROL),
]

FALLBACK_PEST = {
    "name": "Aphid",
    "scientific_name": "Aphidoidea",
    "description": "Small sap-sucking insects that damage plants",
    "symptoms": "Curling leaves, yellowing, stunted growth",
    "control_methods": {
        "organic": [
            "Insecticidal soaps and neem oil are effective against aphids.",
            "Ladybugs and lacewings are natural predators of aphids.",
        ],
        "chemical": ["Systemic insecticides such as imidacloprid for heavy infestations."],
    },
}


def fallback_pest() -> PestInfo:
    """Placeholder pest returned when the AI text describes none."""
    pest = PestInfo(id="pest_001", **FALLBACK_PEST)
    pest.tag_many(
        ["name", "scientific_name", "description", "symptoms", "control_methods"],
        Provenance.SYNTHESIZED,
    )
    return pest


class _PestBuilder:
    """Accumulates one pest while its lines are being read."""

    def __init__(self, name: str):
        self.name = clean_text(name)
        self.scientific_name = ""
        self.description: List[str] = []
        self.symptoms: List[str] = []
        self.organic: List[str] = []
        self.chemical: List[str] = []

    def add_control(self, line: str, policy: UnclassifiedControlPolicy) -> None:
        lowered = line.lower()
        if "organic" in lowered or "natural" in lowered:
            self.organic.append(line)
        elif "chemical" in lowered:
            self.chemical.append(line)
        elif policy == UnclassifiedControlPolicy.BALANCE:
            if len(self.organic) <= len(self.chemical):
                self.organic.append(line)
            else:
                self.chemical.append(line)

    def build(self) -> PestInfo:
        pest = PestInfo(
            id=pseudo_id("pest", self.name),
            name=self.name,
            scientific_name=self.scientific_name,
            description=" ".join(self.description).strip(),
            symptoms=" ".join(self.symptoms).strip(),
            control_methods=ControlMethods(
                organic=[line for line in self.organic if line],
                chemical=[line for line in self.chemical if line],
            ),
        )
        pest.tag("name", Provenance.EXTRACTED)
        for field in ("scientific_name", "description", "symptoms"):
            pest.tag_value(field, getattr(pest, field))
        pest.tag_value(
            "control_methods",
            pest.control_methods.organic + pest.control_methods.chemical,
        )
        return pest


class PestInformationParser(ResponseParser[List[PestInfo]]):
    """State-machine parser for pest descriptions."""

    def __init__(
        self,
        unclassified_policy: UnclassifiedControlPolicy = UnclassifiedControlPolicy.BALANCE,
    ):
        self.unclassified_policy = UnclassifiedControlPolicy(unclassified_policy)

    @staticmethod
    def next_section(line: str) -> Optional[PestSection]:
        """Section a header line switches to, or None for a content line."""
        if NUMBERED_LINE_RE.match(line):
            return PestSection.NAME
        lowered = line.lower()
        for matches, section in TRANSITIONS:
            if matches(lowered):
                return section
        return None

    def parse(self, text: str) -> List[PestInfo]:
        pests: List[PestInfo] = []
        current: Optional[_PestBuilder] = None
        state = PestSection.IDLE

        for line in (text or "").split("\n"):
            section = self.next_section(line)

            if section == PestSection.NAME:
                if current is not None:
                    pests.append(current.build())
                current = _PestBuilder(NUMBERED_LINE_RE.match(line).group(1))
                state = PestSection.NAME
                continue

            if current is None:
                # Preamble before the first numbered pest
                continue

            if section is not None:
                state = section
                inline = value_after_colon(line)
                if section == PestSection.SCIENTIFIC:
                    current.scientific_name = inline
                elif inline:
                    self._append(current, state, inline, classify_as=line)
                continue

            if line.strip():
                self._append(current, state, line.strip())

        if current is not None:
            pests.append(current.build())

        logger.debug(f"Parsed {len(pests)} pests")
        return pests

    def _append(
        self,
        pest: _PestBuilder,
        state: PestSection,
        content: str,
        classify_as: Optional[str] = None,
    ) -> None:
        if state == PestSection.DESCRIPTION:
            pest.description.append(content)
        elif state == PestSection.SYMPTOMS:
            pest.symptoms.append(content)
        elif state == PestSection.CONTROL:
            if classify_as is not None:
                self._add_control_classified(pest, content, classify_as)
            else:
                pest.add_control(content, self.unclassified_policy)

    def _add_control_classified(self, pest: _PestBuilder, content: str, header: str) -> None:
        # "Chemical control: imidacloprid" is bucketed by its header words
        lowered = header.lower()
        if "organic" in lowered or "natural" in lowered:
            pest.organic.append(content)
        elif "chemical" in lowered:
            pest.chemical.append(content)
        else:
            pest.add_control(content, self.unclassified_policy)


def parse_pest_information(
    text: str,
    unclassified_policy: UnclassifiedControlPolicy = UnclassifiedControlPolicy.BALANCE,
) -> List[PestInfo]:
    return PestInformationParser(unclassified_policy).parse(text)
