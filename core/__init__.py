#!/usr/bin/env python3
"""
Core Module
FBX property tree, value model, object/connection registries and the
format-agnostic scene data structures readers hand to the exporter.
"""

from .errors import (
    FbxExportError,
    EmptyValueError,
    EmptyAnimationError,
    MalformedMeshError,
    NonFiniteValueError,
    UnsupportedTopologyError,
    UnsupportedOperationError,
    DanglingConnectionError,
)
from .fbx_values import (
    StringValue,
    IntSequence,
    FloatSequence,
    PropertyValue,
    make_value,
)
from .fbx_tree import FbxProperty
from .fbx_objects import (
    IdentAllocator,
    FbxObject,
    ObjectRegistry,
    Connection,
    ConnectionRegistry,
)
from .fbx_time import KTIME_SECOND, frame_index_to_ktime, seconds_to_ktime
from .scene_data import (
    AnimFrame,
    AnimObject,
    MeshData,
    MeshTopology,
    KeyTiming,
    ExportSettings,
    SceneData,
)

__all__ = [
    'FbxExportError',
    'EmptyValueError',
    'EmptyAnimationError',
    'MalformedMeshError',
    'NonFiniteValueError',
    'UnsupportedTopologyError',
    'UnsupportedOperationError',
    'DanglingConnectionError',
    'StringValue',
    'IntSequence',
    'FloatSequence',
    'PropertyValue',
    'make_value',
    'FbxProperty',
    'IdentAllocator',
    'FbxObject',
    'ObjectRegistry',
    'Connection',
    'ConnectionRegistry',
    'KTIME_SECOND',
    'frame_index_to_ktime',
    'seconds_to_ktime',
    'AnimFrame',
    'AnimObject',
    'MeshData',
    'MeshTopology',
    'KeyTiming',
    'ExportSettings',
    'SceneData',
]
