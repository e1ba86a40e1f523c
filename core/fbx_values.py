#!/usr/bin/env python3
"""
FBX Values Module
Closed set of value types a property line can carry.

A property line is `Name: value, value, ...`. Each value is one of:
- StringValue: rendered quoted
- IntSequence: 64-bit integers, comma-space separated
- FloatSequence: 32-bit floats with exactly three decimals

PropertyValue wraps a whole subtree. It only exists so that a subtree
added in the wrong place is caught; it cannot be rendered.
"""

from dataclasses import dataclass
from typing import Any, Tuple, Union

import numpy as np

from .errors import EmptyValueError, NonFiniteValueError, UnsupportedOperationError

PROPERTY_SEPARATOR = ", "


def format_float(number) -> str:
    """Fixed three-decimal rendering of a float32"""
    text = f"{float(np.float32(number)):.3f}"
    # Values that round to zero are written unsigned
    if text == "-0.000":
        return "0.000"
    return text


def format_int(number) -> str:
    return str(int(number))


@dataclass(frozen=True)
class StringValue:
    text: str

    def to_text(self) -> str:
        return '"' + self.text + '"'


@dataclass(frozen=True)
class IntSequence:
    numbers: Tuple[int, ...]

    def __post_init__(self):
        if len(self.numbers) == 0:
            raise EmptyValueError("IntSequence needs at least one number")
        # Range-check against int64
        checked = np.asarray(self.numbers, dtype=np.int64)
        object.__setattr__(self, 'numbers', tuple(int(n) for n in checked))

    def to_text(self) -> str:
        return PROPERTY_SEPARATOR.join(format_int(n) for n in self.numbers)


@dataclass(frozen=True)
class FloatSequence:
    numbers: Tuple[float, ...]

    def __post_init__(self):
        if len(self.numbers) == 0:
            raise EmptyValueError("FloatSequence needs at least one number")
        with np.errstate(over="ignore"):
            narrowed = np.asarray(self.numbers, dtype=np.float32).reshape(-1)
        if not np.all(np.isfinite(narrowed)):
            raise NonFiniteValueError("FloatSequence cannot hold NaN or infinite values")
        object.__setattr__(self, 'numbers', tuple(float(n) for n in narrowed))

    def to_text(self) -> str:
        return PROPERTY_SEPARATOR.join(format_float(n) for n in self.numbers)


@dataclass(frozen=True)
class PropertyValue:
    property: Any

    def to_text(self) -> str:
        raise UnsupportedOperationError(
            f"Cannot render property '{self.property.name}' as a value; "
            f"add it as a child instead"
        )


FbxValue = Union[StringValue, IntSequence, FloatSequence, PropertyValue]

VALUE_TYPES = (StringValue, IntSequence, FloatSequence, PropertyValue)


def make_value(value) -> FbxValue:
    """Build the matching value variant from a plain Python value

    Args:
        value: str, int, float, an FbxProperty, an existing value, or a
               sequence of numbers / 3-vectors (vectors are flattened)

    Raises:
        EmptyValueError: If a numeric sequence is empty
        TypeError: If the value has no FBX representation
    """
    # Local import: fbx_tree depends on this module
    from .fbx_tree import FbxProperty

    if isinstance(value, VALUE_TYPES):
        return value
    if isinstance(value, FbxProperty):
        return PropertyValue(value)
    if isinstance(value, str):
        return StringValue(value)
    if isinstance(value, (bool, int, np.integer)):
        return IntSequence((int(value),))
    if isinstance(value, (float, np.floating)):
        return FloatSequence((float(value),))

    if isinstance(value, (list, tuple, np.ndarray)):
        arr = np.asarray(value)
        if arr.size == 0:
            raise EmptyValueError("Cannot build a value from an empty array")
        if np.issubdtype(arr.dtype, np.integer):
            return IntSequence(tuple(arr.reshape(-1).tolist()))
        if np.issubdtype(arr.dtype, np.floating):
            return FloatSequence(tuple(arr.reshape(-1).tolist()))

    raise TypeError(f"Unsupported FBX value type: {type(value).__name__}")
