import os

os.environ.setdefault("DATABASE_URL", "sqlite://")

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

import app.models  # noqa: F401
from app.core.rbac import Role
from app.core.tokens import token_authority
from app.crud.user import user_crud
from app.db.base import Base
from app.db.session import get_db
from app.main import api
from app.models.order import Order, OrderStatus
from app.models.region import Region


@pytest.fixture
def engine():
    eng = create_engine("sqlite://", connect_args={"check_same_thread": False}, poolclass=StaticPool)
    Base.metadata.create_all(eng)
    yield eng
    Base.metadata.drop_all(eng)
    eng.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(bind=engine, autocommit=False, autoflush=False)


@pytest.fixture
def db(session_factory):
    with session_factory() as s:
        yield s


@pytest.fixture
def client(session_factory):
    def _get_db():
        s = session_factory()
        try:
            yield s
        finally:
            s.close()

    api.dependency_overrides[get_db] = _get_db
    yield TestClient(api)
    api.dependency_overrides.clear()


@pytest.fixture
def users(db):
    admin = user_crud.create_with_password(
        db, name="Admin", email="admin@cleanorder.com", password="admin123", role_id=int(Role.ADMIN)
    )
    juan = user_crud.create_with_password(
        db, name="Juan", email="Juan@CleanOrder.com", password="juan12345", role_id=int(Role.EMPLEADO)
    )
    ana = user_crud.create_with_password(
        db, name="Ana", email="ana@cleanorder.com", password="ana12345", role_id=int(Role.EMPLEADO)
    )
    return {"admin": admin, "juan": juan, "ana": ana}


@pytest.fixture
def orders(db, users):
    norte = Region(name="Norte")
    db.add(norte); db.flush()
    rows = [
        Order(folio=101, status_id=int(OrderStatus.AGENDADO), client_name="Cliente Uno",
              region_id=norte.id, address="Calle 1", assigned_user_id=users["juan"].id),
        Order(folio=102, status_id=int(OrderStatus.EN_PROCESO), client_name="Cliente Dos",
              address="Calle 2", assigned_user_id=users["juan"].id),
        Order(folio=103, status_id=int(OrderStatus.REALIZADO), client_name="Cliente Tres",
              assigned_user_id=users["juan"].id),
        Order(folio=201, status_id=int(OrderStatus.AGENDADO), client_name="Cliente Ana",
              assigned_user_id=users["ana"].id),
    ]
    db.add_all(rows)
    db.commit()
    return {o.folio: o for o in rows}


@pytest.fixture
def token_for():
    def _issue(user, **kwargs) -> str:
        return token_authority.issue(sub=user.email, user_id=user.id, role=user.role_id, **kwargs)
    return _issue


@pytest.fixture
def auth_headers(token_for):
    """Cookie AuthToken pronto para o TestClient (o jar não reenvia cookie Secure em http)."""
    def _headers(user, **kwargs) -> dict:
        return {"Cookie": f"AuthToken={token_for(user, **kwargs)}"}
    return _headers
