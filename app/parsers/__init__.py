"""
Parsers turning free-form AI answers into structured farming records.

Each parser implements the ``ResponseParser`` interface from
``app.parsers.base``; the module-level ``parse_*`` functions are shortcuts
with default settings.
"""

from app.parsers.alerts import PestAlertParser, parse_pest_alerts
from app.parsers.base import ParseError, ResponseParser
from app.parsers.crops import CropRecommendationParser, parse_crop_recommendations
from app.parsers.market_comparison import MarketComparisonParser, parse_market_comparison
from app.parsers.market_prices import MarketPriceParser, parse_market_prices
from app.parsers.market_trends import MarketTrendParser, parse_market_trends
from app.parsers.pests import (
    PestInformationParser,
    UnclassifiedControlPolicy,
    parse_pest_information,
)
from app.parsers.treatments import TreatmentRecommendationParser, parse_treatment_recommendations

__all__ = [
    "ParseError",
    "ResponseParser",
    "CropRecommendationParser",
    "PestInformationParser",
    "UnclassifiedControlPolicy",
    "TreatmentRecommendationParser",
    "PestAlertParser",
    "MarketPriceParser",
    "MarketTrendParser",
    "MarketComparisonParser",
    "parse_crop_recommendations",
    "parse_pest_information",
    "parse_treatment_recommendations",
    "parse_pest_alerts",
    "parse_market_prices",
    "parse_market_trends",
    "parse_market_comparison",
]
