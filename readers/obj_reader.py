#!/usr/bin/env python3
"""
Wavefront OBJ Reader Module
Pure Python parser for .obj meshes implementing the BaseReader interface.

Only positions, normals and faces are read. OBJ indexes positions and
normals separately; each unique (position, normal) pair becomes one output
vertex so that normals line up with vertices. Every `o` statement starts a
new mesh. All faces of a mesh must be triangles, or all quads.
"""

from typing import Dict, List, Optional, Tuple

from core.errors import UnsupportedTopologyError
from core.scene_data import MeshData, MeshTopology

from .base_reader import BaseReader

FACE_TOPOLOGIES = {
    3: MeshTopology.TRIANGLES,
    4: MeshTopology.QUADS,
}


class _MeshBuilder:
    """Accumulates de-indexed vertices for one OBJ object"""

    def __init__(self, name: str):
        self.name = name
        self.vertices: List[Tuple[float, float, float]] = []
        self.normals: List[Tuple[float, float, float]] = []
        self.indices: List[int] = []
        self.face_sizes = set()
        self._corner_map: Dict[Tuple[int, Optional[int]], int] = {}

    def add_corner(self, key, position, normal) -> int:
        if key not in self._corner_map:
            self._corner_map[key] = len(self.vertices)
            self.vertices.append(position)
            self.normals.append(normal)
        return self._corner_map[key]

    def build(self, has_normals: bool) -> MeshData:
        if len(self.face_sizes) > 1:
            raise UnsupportedTopologyError(
                f"Mesh '{self.name}' mixes face sizes {sorted(self.face_sizes)}; "
                f"only all-triangle or all-quad meshes are supported"
            )
        size = next(iter(self.face_sizes), 3)
        if size not in FACE_TOPOLOGIES:
            raise UnsupportedTopologyError(f"Mesh '{self.name}' has {size}-sided faces")

        return MeshData(
            name=self.name,
            vertices=self.vertices,
            normals=self.normals if has_normals else [],
            indices=self.indices,
            topology=FACE_TOPOLOGIES[size],
        )


def _resolve_index(token: str, count: int) -> int:
    """OBJ indices are 1-based; negative values count back from the end"""
    index = int(token)
    return index - 1 if index > 0 else count + index


class OBJReader(BaseReader):
    """Reader for Wavefront OBJ meshes"""

    def get_format_name(self) -> str:
        return "OBJ"

    def get_meshes(self) -> List[MeshData]:
        if self._meshes_cache is None:
            with open(self.file_path, 'r', encoding='utf-8') as f:
                self._meshes_cache = self.parse(f, default_name=self.file_path.stem)
        return self._meshes_cache

    @staticmethod
    def parse(lines, default_name: str = "mesh") -> List[MeshData]:
        """Parse OBJ text lines into MeshData objects"""
        positions: List[Tuple[float, float, float]] = []
        normals: List[Tuple[float, float, float]] = []
        builders: List[_MeshBuilder] = []
        current: Optional[_MeshBuilder] = None

        for raw_line in lines:
            line = raw_line.split('#', 1)[0].strip()
            if not line:
                continue

            parts = line.split()
            keyword, args = parts[0], parts[1:]

            if keyword == 'v':
                positions.append(tuple(float(a) for a in args[:3]))
            elif keyword == 'vn':
                normals.append(tuple(float(a) for a in args[:3]))
            elif keyword == 'o':
                current = _MeshBuilder(' '.join(args) or default_name)
                builders.append(current)
            elif keyword == 'f':
                if current is None:
                    current = _MeshBuilder(default_name)
                    builders.append(current)

                current.face_sizes.add(len(args))
                for corner in args:
                    fields = corner.split('/')
                    v_idx = _resolve_index(fields[0], len(positions))
                    n_idx = None
                    if len(fields) >= 3 and fields[2]:
                        n_idx = _resolve_index(fields[2], len(normals))
                    normal = normals[n_idx] if n_idx is not None else (0.0, 0.0, 0.0)
                    current.indices.append(current.add_corner((v_idx, n_idx), positions[v_idx], normal))

        has_normals = bool(normals)
        return [builder.build(has_normals) for builder in builders if builder.indices]
