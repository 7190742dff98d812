"""
Tests for the strategy preview API endpoints.
"""

from decimal import Decimal

import pytest
from fastapi.testclient import TestClient

from exitplan.interfaces.api import create_app

CASCADING_TARGETS = [
    {"order": 3, "target_type": "price", "target_value": "200", "sell_percentage": "100"},
    {"order": 1, "target_type": "percentage", "target_value": "20", "sell_percentage": "50"},
    {"order": 2, "target_type": "percentage", "target_value": "50", "sell_percentage": "50"},
]


@pytest.fixture
def client():
    """Create a test client for the API."""
    return TestClient(create_app())


class TestValidateEndpoint:
    """Test POST /strategies/validate."""

    def test_valid_targets_ordered(self, client):
        """Test valid targets come back in evaluation order."""
        response = client.post("/strategies/validate", json={"targets": CASCADING_TARGETS})
        assert response.status_code == 200
        body = response.json()
        assert body["valid"] is True
        assert [t["order"] for t in body["targets"]] == [1, 2, 3]

    def test_every_violation_reported(self, client):
        """Test each invalid field is reported with its code."""
        targets = [
            {"order": 1, "target_type": "price", "target_value": "150", "sell_percentage": "0"},
            {"order": 2, "target_type": "price", "target_value": "-5", "sell_percentage": "50"},
        ]
        response = client.post("/strategies/validate", json={"targets": targets})
        assert response.status_code == 200
        body = response.json()
        assert body["valid"] is False
        assert [v["code"] for v in body["violations"]] == [
            "INVALID_SELL_PERCENTAGE",
            "INVALID_TARGET_VALUE",
        ]
        assert body["violations"][1]["field"] == "target_value"

    def test_unknown_target_type(self, client):
        """Test an unknown target type is unprocessable."""
        targets = [{"order": 1, "target_type": "trailing", "target_value": "1", "sell_percentage": "1"}]
        response = client.post("/strategies/validate", json={"targets": targets})
        assert response.status_code == 422


class TestPreviewEndpoint:
    """Test POST /strategies/preview."""

    def test_preview_with_price(self, client):
        """Test schedule, forecast and summary are returned."""
        response = client.post(
            "/strategies/preview",
            json={
                "token_symbol": "ETH",
                "position": {"quantity": "100", "average_price": "100"},
                "targets": CASCADING_TARGETS,
                "current_price": "130",
            },
        )
        assert response.status_code == 200
        body = response.json()
        triggers = [Decimal(e["trigger_price"]) for e in body["schedule"]["events"]]
        assert triggers == [Decimal("120"), Decimal("150"), Decimal("200")]
        assert Decimal(body["forecast"]["realized_profit"]) == Decimal("1000")
        assert Decimal(body["forecast"]["remaining_quantity"]) == Decimal("50")
        assert body["forecast"]["executed_orders"] == [1]
        assert body["summary"]["total_steps"] == 3

    def test_preview_without_price(self, client):
        """Test market figures are null without a price."""
        response = client.post(
            "/strategies/preview",
            json={"position": {"quantity": 100, "average_price": 100}, "targets": CASCADING_TARGETS},
        )
        assert response.status_code == 200
        forecast = response.json()["forecast"]
        assert forecast["realized_profit"] is None
        assert forecast["unrealized_value"] is None
        assert Decimal(forecast["total_projected_profit"]) == Decimal("4750")

    def test_duplicate_order_is_422(self, client):
        """Test validation failures map to 422 with the error code."""
        targets = [
            {"order": 1, "target_type": "price", "target_value": "150", "sell_percentage": "50"},
            {"order": 1, "target_type": "price", "target_value": "200", "sell_percentage": "50"},
        ]
        response = client.post(
            "/strategies/preview",
            json={"position": {"quantity": "1", "average_price": "100"}, "targets": targets},
        )
        assert response.status_code == 422
        body = response.json()
        assert body["code"] == "DUPLICATE_ORDER"
        assert body["details"]["order"] == 1

    def test_non_positive_quantity_rejected(self, client):
        """Test request validation rejects an empty position."""
        response = client.post(
            "/strategies/preview",
            json={"position": {"quantity": "0", "average_price": "100"}, "targets": []},
        )
        assert response.status_code == 422


class TestTemplateEndpoints:
    """Test the preset template endpoints."""

    def test_list_templates(self, client):
        """Test every preset is listed with its targets."""
        response = client.get("/strategies/templates")
        assert response.status_code == 200
        body = response.json()
        assert [t["key"] for t in body] == ["custom", "25-50-75", "10-20-30", "hodl"]
        assert body[0]["is_default"] is True
        assert [t["target_value"] for t in body[1]["targets"]] == ["50", "100", "200"]
        assert all(t["target_type"] == "percentage" for t in body[1]["targets"])

    def test_get_template(self, client):
        """Test a single template is returned by key."""
        response = client.get("/strategies/templates/hodl")
        assert response.status_code == 200
        assert response.json()["kind"] == "hodl"
        assert response.json()["targets"] == []

    def test_unknown_template_is_404(self, client):
        """Test an unknown key is not found."""
        response = client.get("/strategies/templates/moon")
        assert response.status_code == 404
        assert response.json()["detail"]["code"] == "TEMPLATE_NOT_FOUND"

    def test_preview_from_template(self, client):
        """Test a preview can be built from a template key."""
        response = client.post(
            "/strategies/preview",
            json={
                "position": {"quantity": "100", "average_price": "100"},
                "template": "25-50-75",
                "current_price": "160",
            },
        )
        assert response.status_code == 200
        body = response.json()
        assert body["forecast"]["executed_orders"] == [1]
        assert Decimal(body["forecast"]["realized_profit"]) == Decimal("1250")
        assert Decimal(body["schedule"]["remaining_quantity"]) == Decimal("9.375")

    def test_preview_template_and_targets_rejected(self, client):
        """Test a preview takes either targets or a template."""
        response = client.post(
            "/strategies/preview",
            json={
                "position": {"quantity": "100", "average_price": "100"},
                "targets": CASCADING_TARGETS,
                "template": "hodl",
            },
        )
        assert response.status_code == 422

    def test_preview_unknown_template_is_404(self, client):
        """Test previewing an unknown template is not found."""
        response = client.post(
            "/strategies/preview",
            json={"position": {"quantity": "1", "average_price": "1"}, "template": "moon"},
        )
        assert response.status_code == 404


class TestPortfolioEndpoint:
    """Test POST /strategies/portfolio."""

    def test_partial_portfolio(self, client):
        """Test an unpriced holding makes the totals partial."""
        response = client.post(
            "/strategies/portfolio",
            json={
                "holdings": [
                    {
                        "token_symbol": "eth",
                        "quantity": "100",
                        "average_price": "100",
                        "current_price": "130",
                        "targets": CASCADING_TARGETS,
                    },
                    {"token_symbol": "sol", "quantity": "10", "average_price": "50"},
                ]
            },
        )
        assert response.status_code == 200
        body = response.json()
        portfolio = body["portfolio"]
        assert portfolio["holding_count"] == 2
        assert portfolio["excluded_symbols"] == ["SOL"]
        assert portfolio["unrealized_value"] is None
        assert portfolio["total_profit_loss"] is None
        assert Decimal(portfolio["realized_profit"]) == Decimal("1000")
        assert [h["token_symbol"] for h in body["holdings"]] == ["ETH", "SOL"]

    def test_blank_symbol_rejected(self, client):
        """Test a whitespace-only symbol is unprocessable."""
        response = client.post(
            "/strategies/portfolio",
            json={"holdings": [{"token_symbol": "   ", "quantity": "1", "average_price": "10"}]},
        )
        assert response.status_code == 422

    def test_symbol_whitespace_stripped(self, client):
        """Test surrounding whitespace is removed from symbols."""
        response = client.post(
            "/strategies/portfolio",
            json={"holdings": [{"token_symbol": " btc ", "quantity": "1", "average_price": "10"}]},
        )
        assert response.status_code == 200
        assert response.json()["holdings"][0]["token_symbol"] == "BTC"


class TestTransitionEndpoint:
    """Test POST /strategies/transition."""

    def _strategy(self, status="draft", targets=CASCADING_TARGETS):
        return {
            "token_symbol": "ETH",
            "status": status,
            "position": {"quantity": "100", "average_price": "100"},
            "targets": targets,
        }

    def test_activate_and_scan(self, client):
        """Test activation returns the strategy and its signals."""
        response = client.post(
            "/strategies/transition",
            json={"strategy": self._strategy(), "action": "activate", "current_price": "125"},
        )
        assert response.status_code == 200
        body = response.json()
        assert body["strategy"]["status"] == "active"
        assert [(s["order"], s["signal_type"]) for s in body["signals"]] == [(1, "reached")]

    def test_illegal_transition_is_409(self, client):
        """Test lifecycle violations map to 409."""
        response = client.post(
            "/strategies/transition",
            json={"strategy": self._strategy(status="completed"), "action": "resume"},
        )
        assert response.status_code == 409
        assert response.json()["details"]["target_status"] == "active"

    def test_activation_without_targets_is_409(self, client):
        """Test activation requirements map to 409."""
        response = client.post(
            "/strategies/transition",
            json={"strategy": self._strategy(targets=[]), "action": "activate"},
        )
        assert response.status_code == 409

    def test_null_targets_treated_as_empty(self, client):
        """Test a strategy with null targets is read as having none."""
        strategy = self._strategy()
        strategy["targets"] = None
        response = client.post(
            "/strategies/transition",
            json={"strategy": strategy, "action": "activate"},
        )
        assert response.status_code == 409

    def test_malformed_strategy_is_422(self, client):
        """Test a strategy with a malformed position is unprocessable."""
        strategy = self._strategy()
        strategy["position"] = None
        response = client.post(
            "/strategies/transition",
            json={"strategy": strategy, "action": "pause"},
        )
        assert response.status_code == 422
        assert response.json()["detail"]["code"] == "INVALID_REQUEST"

    def test_unknown_action_rejected(self, client):
        """Test only lifecycle actions are accepted."""
        response = client.post(
            "/strategies/transition",
            json={"strategy": self._strategy(), "action": "delete"},
        )
        assert response.status_code == 422

    def test_request_id_echoed(self, client):
        """Test the correlation ID header is echoed back."""
        response = client.post(
            "/strategies/validate",
            json={"targets": CASCADING_TARGETS},
            headers={"X-Request-ID": "abc-123"},
        )
        assert response.headers["X-Request-ID"] == "abc-123"
