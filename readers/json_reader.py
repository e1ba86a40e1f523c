#!/usr/bin/env python3
"""
JSON Scene Reader Module
Reads meshes and recorded transform animation from a JSON scene description.

Layout:
    {
      "meshes": [
        {"name": "Cube", "vertices": [[x, y, z], ...], "normals": [[x, y, z], ...],
         "indices": [0, 1, 2, ...], "topology": "triangles"}
      ],
      "animations": {
        "Cube": [
          {"position": [x, y, z], "rotation": [x, y, z, w], "scale": [x, y, z], "time": 0.0}
        ]
      }
    }
"""

import json
from typing import Dict, List

from core.scene_data import AnimObject, MeshData, MeshTopology

from .base_reader import BaseReader


def parse_topology(value) -> MeshTopology:
    """Map a topology string to MeshTopology

    Raises:
        ValueError: If the name is unknown
    """
    try:
        return MeshTopology(str(value).lower())
    except ValueError:
        names = ', '.join(t.value for t in MeshTopology)
        raise ValueError(f"Unknown topology '{value}' (expected one of: {names})") from None


def parse_mesh(entry) -> MeshData:
    return MeshData(
        name=entry.get('name', 'unnamed'),
        vertices=[tuple(v) for v in entry.get('vertices', [])],
        normals=[tuple(n) for n in entry.get('normals', [])],
        indices=[int(i) for i in entry.get('indices', [])],
        topology=parse_topology(entry.get('topology', 'triangles')),
    )


def parse_animation(name, frames) -> AnimObject:
    """Build an AnimObject from a list of frame dicts

    Missing rotation defaults to identity, missing scale to one, missing
    time to frame_index / 60.
    """
    anim = AnimObject(name=name)
    for i, frame in enumerate(frames):
        anim.add_frame(
            position=frame.get('position', (0.0, 0.0, 0.0)),
            rotation=frame.get('rotation', (0.0, 0.0, 0.0, 1.0)),
            time=frame.get('time', i / 60.0),
            scale=frame.get('scale', (1.0, 1.0, 1.0)),
        )
    return anim


def parse_animations(data) -> Dict[str, AnimObject]:
    return {name: parse_animation(name, frames) for name, frames in data.items()}


def read_animation_file(file_path) -> Dict[str, AnimObject]:
    """Load a standalone animation file (the "animations" mapping only)"""
    with open(file_path, 'r', encoding='utf-8') as f:
        data = json.load(f)
    return parse_animations(data.get('animations', data))


class JSONSceneReader(BaseReader):
    """Reader for JSON scene descriptions"""

    def __init__(self, file_path: str):
        super().__init__(file_path)
        self._data = None

    def get_format_name(self) -> str:
        return "JSON"

    def _load(self):
        if self._data is None:
            with open(self.file_path, 'r', encoding='utf-8') as f:
                self._data = json.load(f)
        return self._data

    def get_meshes(self) -> List[MeshData]:
        if self._meshes_cache is None:
            self._meshes_cache = [parse_mesh(entry) for entry in self._load().get('meshes', [])]
        return self._meshes_cache

    def get_animations(self) -> Dict[str, AnimObject]:
        return parse_animations(self._load().get('animations', {}))
