from sqlalchemy.orm import Session
from sqlalchemy import select
from passlib.context import CryptContext
from app.crud.base import CRUDBase
from app.models.user import User

# argon2 para hashes novos; bcrypt só verifica senhas legadas
pwd_context = CryptContext(
    schemes=["argon2", "bcrypt_sha256", "bcrypt"],
    deprecated="auto",
    argon2__time_cost=2,
    argon2__memory_cost=19456,
    argon2__parallelism=1,
)


def hash_password(plain: str) -> str:
    return pwd_context.hash(plain)


class CRUDUser(CRUDBase[User]):
    def create_with_password(self, db: Session, *, name: str, email: str, password: str, role_id: int) -> User:
        return self.create(db, {
            "name": name,
            "email": email.strip().lower(),
            "hashed_password": hash_password(password),
            "role_id": role_id,
            "active": True,
        })

    def get_by_email(self, db: Session, email: str) -> User | None:
        return db.execute(select(User).where(User.email == email.strip().lower())).scalar_one_or_none()

    def authenticate(self, db: Session, user: User, password: str) -> bool:
        """Confere a senha; se o hash estiver num esquema antigo, regrava em argon2."""
        try:
            ok, new_hash = pwd_context.verify_and_update(password, user.hashed_password)
        except ValueError:
            # hash desconhecido/corrompido no banco
            return False
        if ok and new_hash:
            self.update(db, user, {"hashed_password": new_hash})
        return ok

user_crud = CRUDUser(User)
