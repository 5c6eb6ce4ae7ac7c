"""
Tests for the advisor API endpoints.
"""

from app.core import depends_advisor
from app.models.advisor import FieldConditions


def test_farming_advice(client, override):
    service = override(depends_advisor, farming_advice="Irrigate every 10 days.")

    response = client.post(
        "/api/v1/advisor/farming-advice",
        json={"crop_type": "Cotton", "conditions": {"temperature": 32, "humidity": 60}},
    )

    assert response.status_code == 200
    assert response.json() == {"text": "Irrigate every 10 days."}
    crop_type, conditions = service.farming_advice.call_args.args
    assert crop_type == "Cotton"
    assert conditions == FieldConditions(temperature=32, humidity=60)


def test_farming_advice_humidity_range(client, override):
    override(depends_advisor, farming_advice="")
    response = client.post(
        "/api/v1/advisor/farming-advice",
        json={"crop_type": "Cotton", "conditions": {"humidity": 140}},
    )
    assert response.status_code == 422


def test_pest_control(client, override):
    service = override(depends_advisor, pest_control="Use neem oil.")
    response = client.post(
        "/api/v1/advisor/pest-control",
        json={"pest_type": "aphids", "crop_type": "mustard"},
    )
    assert response.json()["text"] == "Use neem oil."
    service.pest_control.assert_awaited_once_with("aphids", "mustard")


def test_price_prediction(client, override):
    service = override(depends_advisor, price_prediction="Prices will rise.")
    response = client.post("/api/v1/advisor/price-prediction", json={"crop_type": "onion"})
    assert response.json()["text"] == "Prices will rise."
    service.price_prediction.assert_awaited_once_with("onion")


def test_ask(client, override):
    service = override(depends_advisor, ask="Sow in November.")
    response = client.post("/api/v1/advisor/ask", json={"prompt": "When to sow mustard?"})
    assert response.status_code == 200
    assert response.json()["text"] == "Sow in November."
    service.ask.assert_awaited_once_with("When to sow mustard?")


def test_ask_empty_prompt(client, override):
    override(depends_advisor, ask="")
    response = client.post("/api/v1/advisor/ask", json={"prompt": ""})
    assert response.status_code == 422
