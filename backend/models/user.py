from sqlalchemy import Column, String
from sqlalchemy.orm import composite

from core.database import Base
from core.domain.entity import BaseEntity
from core.domain.values import Email, PasswordHash
from core.persistence.types import ScalarString


class User(BaseEntity, Base):
    """Registered account. The plaintext password is never stored."""
    __tablename__ = "users"

    email = Column(ScalarString(Email, Email.MAX_LENGTH), nullable=False, unique=True, index=True)
    password_hash = Column("PasswordHash", String(PasswordHash.HASH_MAX_LENGTH), nullable=False)
    password_salt = Column("PasswordSalt", String(PasswordHash.SALT_MAX_LENGTH), nullable=False)

    password = composite(PasswordHash, password_hash, password_salt)
