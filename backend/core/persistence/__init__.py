"""Persistence mapping for value objects."""
from .conversions import ConversionRegistry, ScalarConversion, registry, value_conversion
from .types import ScalarDateTime, ScalarString, ScalarType

__all__ = [
    "ConversionRegistry",
    "ScalarConversion",
    "registry",
    "value_conversion",
    "ScalarDateTime",
    "ScalarString",
    "ScalarType",
]
