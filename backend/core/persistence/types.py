"""SQLAlchemy column types for value objects."""
from sqlalchemy import DateTime, String
from sqlalchemy.types import TypeDecorator

from .conversions import ConversionRegistry, registry as default_registry


class ScalarType(TypeDecorator):
    """Stores a value object as its primitive.

    Bound parameters are unwrapped. Raw primitives in filters are built into
    the value object first, so they are normalized and validated the same
    way. Loaded values are rebuilt through the value object's constructor.
    """
    impl = String
    cache_ok = True

    def __init__(self, scalar_type: type, *args, registry: ConversionRegistry = default_registry, **kwargs):
        self.scalar_type = scalar_type
        self._conversion = registry.get(scalar_type)
        super().__init__(*args, **kwargs)

    def process_bind_param(self, value, dialect):
        if value is None:
            return None
        if not isinstance(value, self.scalar_type):
            value = self._conversion.from_column(value)
        return self._conversion.to_column(value)

    def process_result_value(self, value, dialect):
        return self._conversion.from_column_or_none(value)


class ScalarString(ScalarType):
    impl = String
    cache_ok = True

    def __init__(self, scalar_type: type, length: int | None = None, **kwargs):
        self.length = length
        super().__init__(scalar_type, length, **kwargs)


class ScalarDateTime(ScalarType):
    impl = DateTime
    cache_ok = True

    def __init__(self, scalar_type: type, **kwargs):
        super().__init__(scalar_type, timezone=True, **kwargs)
