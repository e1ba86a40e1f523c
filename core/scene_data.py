#!/usr/bin/env python3
"""
Scene Data Module
Format-agnostic data structures for scene representation.

This module defines the intermediate data structures that decouple
readers (JSON, OBJ) from the FBX exporter. Readers extract scene data
into these structures, and the exporter consumes them without knowledge
of the source format.
"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import List, Dict, Optional, Tuple
from enum import Enum

from .transform_math import quaternion_to_euler


Vector3 = Tuple[float, float, float]
Quaternion = Tuple[float, float, float, float]


class MeshTopology(Enum):
    """Primitive layout of a mesh index buffer"""
    TRIANGLES = "triangles"
    QUADS = "quads"
    LINES = "lines"
    LINE_STRIP = "line_strip"
    POINTS = "points"


class KeyTiming(Enum):
    """What drives AnimationCurve KeyTime values"""
    FRAME_INDEX = "index"  # frame number at ExportSettings.frame_rate
    FRAME_TIME = "time"    # AnimFrame.time in seconds


@dataclass
class AnimFrame:
    """Single sampled transform

    Attributes:
        position: [x, y, z] local translation
        rotation: (x, y, z, w) local rotation quaternion
        scale: [sx, sy, sz] scale multipliers
        time: sample time in seconds
    """
    position: Vector3
    rotation: Quaternion
    scale: Vector3 = (1.0, 1.0, 1.0)
    time: float = 0.0

    @property
    def rotation_euler(self) -> Vector3:
        """Euler degrees derived from the quaternion on every access"""
        return quaternion_to_euler(self.rotation)


@dataclass
class AnimObject:
    """Recorded animation for one object

    Frames are appended in increasing time order; the order is not validated.

    Attributes:
        name: Name of the animated object
        frames: Ordered frame samples
    """
    name: str = ""
    frames: List[AnimFrame] = field(default_factory=list)

    def add_frame(self, position, rotation, time, scale=(1.0, 1.0, 1.0)):
        """Append a sample and return it"""
        frame = AnimFrame(
            position=tuple(position),
            rotation=tuple(rotation),
            scale=tuple(scale),
            time=float(time),
        )
        self.frames.append(frame)
        return frame

    def get_curve_data(self, getter) -> Tuple[List[float], List[float], List[float]]:
        """Split per-frame vec3 samples into x, y and z arrays

        Args:
            getter: Callable returning an (x, y, z) triple for a frame
        """
        xs, ys, zs = [], [], []
        for frame in self.frames:
            x, y, z = getter(frame)
            xs.append(x)
            ys.append(y)
            zs.append(z)
        return xs, ys, zs

    def get_position_curve_data(self):
        return self.get_curve_data(lambda frame: frame.position)

    def get_rotation_curve_data(self):
        return self.get_curve_data(lambda frame: frame.rotation_euler)

    def get_scale_curve_data(self):
        return self.get_curve_data(lambda frame: frame.scale)


@dataclass
class MeshData:
    """Polygon mesh as handed over by the host application

    Attributes:
        name: Mesh object name
        vertices: Vertex positions as (x, y, z) tuples
        normals: Per-vertex normals as (x, y, z) tuples
        indices: Flat polygon index buffer
        topology: How indices group into primitives
    """
    name: str
    vertices: List[Vector3]
    normals: List[Vector3]
    indices: List[int]
    topology: MeshTopology = MeshTopology.TRIANGLES

    def get_indices(self) -> List[int]:
        return self.indices

    def get_topology(self) -> MeshTopology:
        return self.topology


@dataclass
class ExportSettings:
    """Options for one FBX export

    Attributes:
        creator: Creator string written to the header
        frame_rate: Frames per second used for frame-index key times
        key_timing: Whether key times come from frame index or frame time
        material_name: Dummy material every mesh is connected to
        scene_name: Name of the root model meshes are parented to
        comments: Extra attribution lines written at the top of the file
        timestamp: CreationTimeStamp value (None = time of export)
    """
    creator: str = "FBX ASCII Exporter"
    frame_rate: float = 60.0
    key_timing: KeyTiming = KeyTiming.FRAME_INDEX
    material_name: str = "DefaultMaterial"
    scene_name: str = "Scene"
    comments: List[str] = field(default_factory=list)
    timestamp: Optional[datetime] = None


@dataclass
class SceneData:
    """Complete scene data extracted from an input file

    Attributes:
        meshes: All meshes in file order
        animations: Recorded animation keyed by mesh name
        source_file_path: Absolute path to the source file
        source_format_name: Human-readable format name ("JSON" or "OBJ")
    """
    meshes: List[MeshData]
    animations: Dict[str, AnimObject] = field(default_factory=dict)
    source_file_path: str = ""
    source_format_name: str = ""

    def get_mesh_by_name(self, name: str) -> Optional[MeshData]:
        """Find mesh by name

        Args:
            name: Mesh name to find

        Returns:
            MeshData if found, None otherwise
        """
        for mesh in self.meshes:
            if mesh.name == name:
                return mesh
        return None
