"""
Prompt Templates for Smart Farming AI requests

This module defines the prompt templates sent to the generative model. The
answer formats they request are the ones the parsers in ``app.parsers``
understand, so a template and its parser must change together.
"""

from langchain_core.prompts import PromptTemplate

# Template 1: Crop recommendations (numbered list with labelled bullets)
CROP_RECOMMENDATION_TEMPLATE = """As an agricultural expert, recommend the best crops to grow with these conditions:
{conditions}

Please provide recommendations in this specific format for each crop:
1. [Crop Name]
   - Growing Season: [seasons]
   - Water Requirement: [low/medium/high]
   - Temperature Range: [min-max °C]
   - Soil Requirement: [soil types]
   - Growing Duration: [days/months]
   - Expected Yield: [amount per acre/hectare]
   - Key Benefits: [brief description]

Recommend 5 suitable crops for these conditions."""

# Template 2: Pest identification
PEST_IDENTIFICATION_TEMPLATE = """Identify common pests that affect {crop_name} in India. For each pest:
1. Provide the pest name
2. Scientific name
3. Detailed description of appearance
4. Symptoms shown in infected plants
5. Control methods (both organic and chemical)

Format the information for 3-5 common pests that are most likely to be found."""

# Template 3: Treatment recommendations
TREATMENT_TEMPLATE = """Provide comprehensive treatment recommendations for {pest_name} ({scientific_name})
affecting agricultural crops. Include:

1. Organic Control Methods:
   - Natural predators and biological controls
   - Organic sprays and preparations
   - Cultural practices to minimize infestation

2. Chemical Control Methods:
   - Recommended pesticides and application rates
   - Timing of application
   - Safety precautions

3. Preventive Measures:
   - Crop rotation strategies
   - Resistant varieties
   - Early detection methods

4. Integrated Pest Management (IPM) Approach:
   - Combined strategies
   - Monitoring techniques
   - Economic thresholds for treatment

Please be specific and practical in your recommendations."""

# Template 4: Pest alert bulletin
PEST_ALERT_TEMPLATE = """Generate current pest alerts for agricultural regions in {region} for {month}.
Include information on:

1. Current pest outbreaks
2. Severity levels
3. Affected crops
4. Recommended immediate actions
5. Expected progression in the next 2-3 weeks

Format this as an official pest alert bulletin that would be issued to farmers."""

# Template 5: Market prices
MARKET_PRICES_TEMPLATE = """Generate realistic and accurate market price data for {crop} in {location} as of {as_of}.

Include:
1. Current market price (in ₹/quintal)
2. Price change from previous week (percentage)
3. Price trend (increasing, decreasing, or stable)
4. Market demand (high, medium, or low)
5. Supply status (abundant, sufficient, or limited)
6. Price forecast for next week

Format the data for easy parsing, and provide information for at least 5 crops if "major crops" was specified."""

# Template 6: Market trends
MARKET_TRENDS_TEMPLATE = """Generate realistic market price trend data for {crop} {location_clause} for the past {days} days (ending on {as_of}).

The data should include:
1. Daily prices (in ₹/quintal)
2. Key market events or factors that influenced price changes
3. Overall trend analysis
4. Price volatility assessment

Format the response as time-series data showing prices for each date in the period, with at least one significant market event noted."""

# Template 7: Market comparison
MARKET_COMPARISON_TEMPLATE = """Generate a comparative analysis of market prices for {crop} across different locations ({locations}) as of {as_of}.

For each location, include:
1. Current market price (in ₹/quintal)
2. Historical average price (past 3 months)
3. Price differential from national average (percentage)
4. Local factors affecting price
5. Transportation costs from production centers

Also include a brief analysis of why prices differ across these locations."""

# Template 8-10: Free-text advisor prompts
FARMING_ADVICE_TEMPLATE = """As a farming expert, give me specific advice for growing {crop_type} with the following conditions:
Temperature: {temperature}°C,
Humidity: {humidity}%,
Soil type: {soil_type},
Recent rainfall: {rainfall}mm.
Please include advice on irrigation, pest prevention, and optimal fertilization."""

PEST_CONTROL_TEMPLATE = """Recommend organic and chemical methods to control {pest_type} affecting {crop_type} crops.
Include application methods, precautions, and effectiveness."""

PRICE_PREDICTION_TEMPLATE = """Based on current market trends, predict the price trajectory for {crop_type}
in the next 3 months. Include factors that might affect the price."""


TEMPLATES = {
    "crop_recommendation": CROP_RECOMMENDATION_TEMPLATE,
    "pest_identification": PEST_IDENTIFICATION_TEMPLATE,
    "treatment": TREATMENT_TEMPLATE,
    "pest_alert": PEST_ALERT_TEMPLATE,
    "market_prices": MARKET_PRICES_TEMPLATE,
    "market_trends": MARKET_TRENDS_TEMPLATE,
    "market_comparison": MARKET_COMPARISON_TEMPLATE,
    "farming_advice": FARMING_ADVICE_TEMPLATE,
    "pest_control": PEST_CONTROL_TEMPLATE,
    "price_prediction": PRICE_PREDICTION_TEMPLATE,
}


def get_prompt_template(name: str) -> PromptTemplate:
    """
    Select a prompt template by name.

    Args:
        name: One of the keys of TEMPLATES (e.g. "crop_recommendation")

    Returns:
        The corresponding PromptTemplate

    Raises:
        ValueError: If name is not recognized
    """
    if name not in TEMPLATES:
        raise ValueError(
            f"Unknown prompt template: '{name}'. "
            f"Expected one of: {', '.join(sorted(TEMPLATES))}."
        )
    return PromptTemplate.from_template(TEMPLATES[name])


def render_prompt(name: str, **variables) -> str:
    """Render a named template with its variables."""
    return get_prompt_template(name).format(**variables)
