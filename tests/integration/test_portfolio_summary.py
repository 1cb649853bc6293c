from datetime import date
from decimal import Decimal

import pytest

from app.infrastructure.db.models import InvestmentModel


def _investment(user_id, symbol, quantity, purchase, current):
    return InvestmentModel(
        user_id=user_id,
        symbol=symbol,
        company_name=f"{symbol} Corp",
        quantity=quantity,
        purchase_price=Decimal(purchase),
        current_price=Decimal(current),
        purchase_date=date(2024, 1, 2),
    )


@pytest.mark.asyncio
@pytest.mark.integration
async def test_summary_empty_portfolio(client, auth_headers):
    resp = await client.get("/api/v1/portfolio/summary", headers=auth_headers)

    assert resp.status_code == 200
    data = resp.json()
    assert data["total_invested"] == 0.0
    assert data["total_value"] == 0.0
    assert data["total_gain_loss"] == 0.0
    assert data["gain_loss_percent"] == 0.0
    assert data["total_holdings"] == 0
    assert data["display"] == {
        "total_invested": "$0.00",
        "total_value": "$0.00",
        "total_gain_loss": "$0.00",
        "gain_loss_percent": "0.00%",
    }


@pytest.mark.asyncio
@pytest.mark.integration
async def test_summary_weights_by_invested_value(client, db_session, auth_headers, other_auth_headers):
    db_session.add_all([
        _investment("user-1", "TINY", 1, "10.00", "20.00"),
        _investment("user-1", "BIG", 1000, "100.00", "99.00"),
        # Another user's holding must not leak into the totals
        _investment("user-2", "OTHER", 5, "1.00", "500.00"),
    ])
    await db_session.commit()

    resp = await client.get("/api/v1/portfolio/summary", headers=auth_headers)

    assert resp.status_code == 200
    data = resp.json()
    assert data["total_invested"] == 100010.0
    assert data["total_value"] == 99020.0
    assert data["total_gain_loss"] == -990.0
    assert data["gain_loss_percent"] == -0.99
    assert data["total_holdings"] == 2
    assert data["display"]["total_invested"] == "$100,010.00"
    assert data["display"]["total_gain_loss"] == "-$990.00"
    assert data["display"]["gain_loss_percent"] == "-0.99%"


@pytest.mark.asyncio
@pytest.mark.integration
async def test_summary_follows_updates(client, auth_headers):
    created = await client.post(
        "/api/v1/investments",
        json={
            "symbol": "NVDA",
            "company_name": "NVIDIA",
            "quantity": 100,
            "purchase_price": "150.00",
            "current_price": "160.00",
            "purchase_date": "2024-03-01",
        },
        headers=auth_headers,
    )
    investment_id = created.json()["id"]

    first = (await client.get("/api/v1/portfolio/summary", headers=auth_headers)).json()
    assert first["total_gain_loss"] == 1000.0
    assert first["gain_loss_percent"] == 6.67
    assert first["display"]["total_gain_loss"] == "+$1,000.00"
    assert first["display"]["gain_loss_percent"] == "+6.67%"

    await client.put(
        f"/api/v1/investments/{investment_id}",
        json={
            "symbol": "NVDA",
            "company_name": "NVIDIA",
            "quantity": 100,
            "purchase_price": "150.00",
            "current_price": "140.00",
            "purchase_date": "2024-03-01",
        },
        headers=auth_headers,
    )

    second = (await client.get("/api/v1/portfolio/summary", headers=auth_headers)).json()
    assert second["total_gain_loss"] == -1000.0
    assert second["gain_loss_percent"] == -6.67


@pytest.mark.asyncio
@pytest.mark.integration
async def test_summary_zero_cost_holding(client, db_session, auth_headers):
    db_session.add(_investment("user-1", "GIFT", 10, "0.00", "12.50"))
    await db_session.commit()

    data = (await client.get("/api/v1/portfolio/summary", headers=auth_headers)).json()

    assert data["total_invested"] == 0.0
    assert data["total_value"] == 125.0
    assert data["gain_loss_percent"] == 0.0
