"""Value object <-> column primitive conversions.

``to_column`` unwraps and never fails. ``from_column`` runs the value
object's constructor again, so a row that violates current rules raises
``ValidationError`` on load instead of producing an invalid object.
"""
import threading
from dataclasses import dataclass
from typing import Any, Callable, Generic, TypeVar

from core.domain.values import CreatedAt, Email, Id, UtcDateTime

S = TypeVar("S")


@dataclass(frozen=True, slots=True)
class ScalarConversion(Generic[S]):
    scalar_type: type[S]
    to_column: Callable[[S], Any]
    from_column: Callable[[Any], S]

    def to_column_or_none(self, scalar: S | None) -> Any:
        return None if scalar is None else self.to_column(scalar)

    def from_column_or_none(self, primitive: Any) -> S | None:
        return None if primitive is None else self.from_column(primitive)


class ConversionRegistry:
    """Scalar type -> conversion.

    Each type is registered once. Lookups read the dict without locking;
    registration takes the lock and re-checks.
    """

    __slots__ = ("_conversions", "_lock")

    def __init__(self):
        self._conversions: dict[type, ScalarConversion] = {}
        self._lock = threading.Lock()

    def register(self, conversion: ScalarConversion) -> ScalarConversion:
        with self._lock:
            if conversion.scalar_type in self._conversions:
                raise ValueError(f"Conversion for {conversion.scalar_type.__name__} is already registered")
            self._conversions[conversion.scalar_type] = conversion
        return conversion

    def get(self, scalar_type: type[S]) -> ScalarConversion[S]:
        conversion = self._conversions.get(scalar_type)
        if conversion is None:
            raise KeyError(f"No conversion registered for {scalar_type.__name__}")
        return conversion

    def __contains__(self, scalar_type: type) -> bool:
        return scalar_type in self._conversions

    def __len__(self) -> int:
        return len(self._conversions)


def value_conversion(scalar_type: type[S]) -> ScalarConversion[S]:
    """Conversion for value objects that wrap a single ``.value``."""
    return ScalarConversion(scalar_type, lambda scalar: scalar.value, scalar_type)


registry = ConversionRegistry()
registry.register(value_conversion(Id))
registry.register(value_conversion(Email))
registry.register(value_conversion(UtcDateTime))
registry.register(value_conversion(CreatedAt))
