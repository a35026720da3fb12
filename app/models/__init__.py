# app/models/__init__.py
# Carrega módulos para registrar tabelas no metadata (Alembic / create_all)
from app.db.base import Base  # noqa: F401
import app.models.region  # noqa: F401
import app.models.user    # noqa: F401
import app.models.order   # noqa: F401

__all__: list[str] = []
