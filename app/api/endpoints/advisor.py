"""
Advisor API endpoints for Smart Farming system.

Free-text answers from the generative model, returned unparsed.
"""

from fastapi import APIRouter, Depends

from app.core import depends_advisor
from app.models.advisor import (
    AdviceResponse,
    AskRequest,
    FarmingAdviceRequest,
    PestControlRequest,
    PricePredictionRequest,
)
from app.services.advisor_service import AdvisorService

router = APIRouter(prefix="/api/v1/advisor", tags=["advisor"])


@router.post("/farming-advice", response_model=AdviceResponse)
async def farming_advice(
    request: FarmingAdviceRequest,
    advisor: AdvisorService = Depends(depends_advisor),
) -> AdviceResponse:
    """Irrigation, pest prevention and fertilization advice for a crop."""
    text = await advisor.farming_advice(request.crop_type, request.conditions)
    return AdviceResponse(text=text)


@router.post("/pest-control", response_model=AdviceResponse)
async def pest_control(
    request: PestControlRequest,
    advisor: AdvisorService = Depends(depends_advisor),
) -> AdviceResponse:
    text = await advisor.pest_control(request.pest_type, request.crop_type)
    return AdviceResponse(text=text)


@router.post("/price-prediction", response_model=AdviceResponse)
async def price_prediction(
    request: PricePredictionRequest,
    advisor: AdvisorService = Depends(depends_advisor),
) -> AdviceResponse:
    text = await advisor.price_prediction(request.crop_type)
    return AdviceResponse(text=text)


@router.post("/ask", response_model=AdviceResponse)
async def ask(
    request: AskRequest,
    advisor: AdvisorService = Depends(depends_advisor),
) -> AdviceResponse:
    """
    Send a custom prompt.

    Example:
        POST /api/v1/advisor/ask
        {"prompt": "When should I sow mustard in Rajasthan?"}
        Response:
        {"text": "Mustard is usually sown between ..."}
    """
    return AdviceResponse(text=await advisor.ask(request.prompt))
