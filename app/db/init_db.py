# app/db/init_db.py
import os
from datetime import datetime, timedelta, timezone

from sqlalchemy import select
from sqlalchemy.orm import Session

from app.core.rbac import Role
from app.crud.user import hash_password
from app.models.order import Order, OrderStatus
from app.models.region import Region
from app.models.user import User

ADMIN_EMAIL = os.getenv("SEED_ADMIN_EMAIL", "admin@cleanorder.com")
ADMIN_PASSWORD = os.getenv("SEED_ADMIN_PASSWORD", "admin123")

REGION_NAMES = ["Norte", "Centro", "Sur"]

def init_db(db: Session) -> None:
    regions = {r.name: r for r in db.scalars(select(Region)).all()}
    for name in REGION_NAMES:
        if name not in regions:
            r = Region(name=name)
            db.add(r); db.flush()
            regions[name] = r

    admin = db.scalar(select(User).where(User.email == ADMIN_EMAIL))
    if not admin:
        admin = User(
            name="Administrador",
            email=ADMIN_EMAIL,
            hashed_password=hash_password(ADMIN_PASSWORD),
            role_id=int(Role.ADMIN),
            active=True,
        )
        db.add(admin); db.flush()

    # ordens demo só num banco vazio
    if db.scalar(select(Order.id).limit(1)) is None:
        tomorrow = datetime.now(timezone.utc) + timedelta(days=1)
        db.add_all([
            Order(folio=1, status_id=int(OrderStatus.AGENDADO), client_name="Juan Pérez",
                  region_id=regions["Norte"].id, address="Av. Reforma 100",
                  scheduled_at=tomorrow, assigned_user_id=admin.id),
            Order(folio=2, status_id=int(OrderStatus.EN_PROCESO), client_name="María López",
                  region_id=regions["Centro"].id, address="Calle 5 de Mayo 20",
                  scheduled_at=tomorrow, assigned_user_id=admin.id),
        ])

    db.commit()
