from datetime import date, timedelta
from decimal import Decimal

import pytest

from app.domain.models import InvestmentData, User
from app.domain.services.auth_service import AuthService
from app.infrastructure.db.repositories.investment_repository import (
    InvestmentNotFoundError,
    InvestmentRepository,
)
from app.infrastructure.db.repositories.session_repository import SessionRepository
from app.infrastructure.db.repositories.user_repository import UserRepository
from app.utils.time import now_utc_naive


def _data(symbol="AAPL", quantity=10, purchase="100.00", current="110.00"):
    return InvestmentData(
        symbol=symbol,
        company_name=f"{symbol} Inc.",
        quantity=quantity,
        purchase_price=Decimal(purchase),
        current_price=Decimal(current),
        purchase_date=date(2024, 5, 1),
    )


@pytest.fixture()
async def users(db_session):
    repo = UserRepository(db_session)
    await repo.upsert(User(id="alice", email="alice@example.com"))
    await repo.upsert(User(id="bob", email="bob@example.com"))
    await db_session.commit()


@pytest.mark.asyncio
@pytest.mark.integration
async def test_investment_repository_roundtrip(db_session, users):
    repo = InvestmentRepository(db_session)

    created = await repo.create("alice", _data())
    await db_session.commit()

    fetched = await repo.get(created.id, "alice")
    assert fetched is not None
    assert fetched.symbol == "AAPL"
    assert fetched.purchase_price == Decimal("100.00")
    assert fetched.as_holding().quantity == 10

    assert await repo.get(created.id, "bob") is None


@pytest.mark.asyncio
@pytest.mark.integration
async def test_investment_repository_update_scoped(db_session, users):
    repo = InvestmentRepository(db_session)
    created = await repo.create("alice", _data())

    with pytest.raises(InvestmentNotFoundError):
        await repo.update(created.id, "bob", _data(quantity=1))

    updated = await repo.update(created.id, "alice", _data(symbol="MSFT", quantity=3))
    assert updated.symbol == "MSFT"
    assert updated.quantity == 3
    assert updated.updated_at >= created.updated_at


@pytest.mark.asyncio
@pytest.mark.integration
async def test_investment_repository_delete_scoped(db_session, users):
    repo = InvestmentRepository(db_session)
    created = await repo.create("alice", _data())

    assert await repo.delete(created.id, "bob") is False
    assert await repo.delete(created.id, "alice") is True
    assert await repo.delete(created.id, "alice") is False
    assert await repo.list_for_user("alice") == []


@pytest.mark.asyncio
@pytest.mark.integration
async def test_user_repository_upsert(db_session):
    repo = UserRepository(db_session)

    first = await repo.upsert(User(id="carol", email="carol@example.com", first_name="Carol"))
    second = await repo.upsert(User(id="carol", email="carol@new.example.com"))

    assert second.email == "carol@new.example.com"
    assert second.first_name is None
    assert second.created_at == first.created_at


@pytest.mark.asyncio
@pytest.mark.integration
async def test_session_repository_expiry(db_session, users):
    repo = SessionRepository(db_session)
    now = now_utc_naive()
    await repo.create("alice", "a" * 64, now + timedelta(hours=1))
    await repo.create("alice", "b" * 64, now - timedelta(seconds=1))

    assert await repo.get_active("a" * 64, now) is not None
    assert await repo.get_active("b" * 64, now) is None

    assert await repo.delete_expired(now) == 1
    assert await repo.delete("a" * 64) is True
    assert await repo.delete("a" * 64) is False


@pytest.mark.asyncio
@pytest.mark.integration
async def test_auth_service_sign_in_and_out(db_session):
    service = AuthService(db_session, ttl_hours=1)

    issued = await service.sign_in(User(id="dave", email="dave@example.com"))
    assert issued.expires_at > now_utc_naive()

    user = await service.resolve(issued.token)
    assert user is not None and user.id == "dave"
    assert await service.resolve("") is None
    assert await service.resolve("unknown") is None

    assert await service.sign_out(issued.token) is True
    assert await service.resolve(issued.token) is None
