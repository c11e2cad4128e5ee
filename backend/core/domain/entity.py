"""Entity base for ORM models."""
from sqlalchemy import Column, inspect
from sqlalchemy.orm import validates

from core.errors.exceptions import PreconditionError
from core.persistence.types import ScalarDateTime, ScalarString

from .values import CreatedAt, Id

_ASSIGN_ONCE = {"id": Id, "created_at": CreatedAt}


class BaseEntity:
    """Identity and creation time for every entity.

    Mix in ahead of the declarative ``Base``. ``id`` and ``created_at`` get
    fresh values when not supplied and cannot be reassigned afterwards.
    """

    id = Column(ScalarString(Id, Id.MAX_LENGTH), primary_key=True)
    created_at = Column(ScalarDateTime(CreatedAt), nullable=False)

    def __init__(self, *, id: Id | None = None, created_at: CreatedAt | None = None, **kwargs):
        super().__init__(
            id=Id() if id is None else id,
            created_at=CreatedAt() if created_at is None else created_at,
            **kwargs,
        )

    @validates("id", "created_at")
    def _assign_once(self, key, value):
        expected = _ASSIGN_ONCE[key]
        if not isinstance(value, expected):
            raise PreconditionError(f"{key} must be {expected.__name__}, got {type(value).__name__}")
        if inspect(self).has_identity or self.__dict__.get(key) is not None:
            raise PreconditionError(f"{type(self).__name__}.{key} is already assigned")
        return value

    def __repr__(self) -> str:
        return f"<{type(self).__name__} id={self.id}>"
