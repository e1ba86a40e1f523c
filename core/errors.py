#!/usr/bin/env python3
"""
Errors Module
Exception types raised while building or writing an FBX ASCII document.

All errors derive from FbxExportError so callers can catch the whole family.
They are raised at construction time; nothing is written once one fires.
"""


class FbxExportError(Exception):
    """Base class for all FBX export failures"""


class EmptyValueError(FbxExportError, ValueError):
    """A numeric value was constructed from an empty array"""


class EmptyAnimationError(FbxExportError, ValueError):
    """An animation with zero frames was passed to the curve builder"""


class MalformedMeshError(FbxExportError, ValueError):
    """Mesh index data does not divide into whole polygons"""


class NonFiniteValueError(FbxExportError, ValueError):
    """A float value is NaN or infinite (also after narrowing to float32)"""


class UnsupportedTopologyError(FbxExportError):
    """Mesh topology is neither triangles nor quads"""


class UnsupportedOperationError(FbxExportError, TypeError):
    """The property tree was built incorrectly (implementation bug)

    Raised when a subtree was added as a value instead of as a child,
    or when a leaf node carries no values at all.
    """


class DanglingConnectionError(FbxExportError, KeyError):
    """A connection references an object id that is not registered"""
