#!/usr/bin/env python3
"""
Base Reader Module
Abstract interface for reading scene files into SceneData
"""

from abc import ABC, abstractmethod
from pathlib import Path
from typing import Dict, List

from core.scene_data import AnimObject, MeshData, SceneData


class BaseReader(ABC):
    """Abstract base class for scene file readers

    Provides a consistent interface for reading different input formats.
    All format-specific readers (JSONSceneReader, OBJReader) implement these methods.
    """

    def __init__(self, file_path: str):
        """Initialize reader with file path

        Args:
            file_path: Path to the scene file
        """
        self.file_path = Path(file_path)
        self._meshes_cache = None

    @abstractmethod
    def get_format_name(self) -> str:
        """Return human-readable format name (e.g., 'JSON', 'OBJ')"""
        pass

    @abstractmethod
    def get_meshes(self) -> List[MeshData]:
        """Get all meshes in the file (cached)"""
        pass

    def get_animations(self) -> Dict[str, AnimObject]:
        """Get recorded animation keyed by mesh name

        Formats without animation return an empty dict.
        """
        return {}

    def extract_scene_data(self) -> SceneData:
        """Read everything into a format-agnostic SceneData"""
        return SceneData(
            meshes=self.get_meshes(),
            animations=self.get_animations(),
            source_file_path=str(self.file_path.resolve()),
            source_format_name=self.get_format_name(),
        )
