#!/usr/bin/env python3
"""
Readers Module
Scene file readers for the supported input formats (JSON scene, Wavefront OBJ)
"""

from pathlib import Path

from .base_reader import BaseReader
from .json_reader import JSONSceneReader, read_animation_file
from .obj_reader import OBJReader

# Supported file extensions
JSON_EXTENSIONS = {'.json'}
OBJ_EXTENSIONS = {'.obj'}
SUPPORTED_EXTENSIONS = JSON_EXTENSIONS | OBJ_EXTENSIONS


def create_reader(input_file):
    """Factory function to create appropriate reader based on file extension

    Args:
        input_file: Path to input scene file

    Returns:
        BaseReader: JSONSceneReader or OBJReader instance

    Raises:
        ValueError: If file extension is not supported
    """
    path = Path(input_file)
    ext = path.suffix.lower()

    if ext in JSON_EXTENSIONS:
        return JSONSceneReader(input_file)
    elif ext in OBJ_EXTENSIONS:
        return OBJReader(input_file)
    else:
        raise ValueError(
            f"Unsupported file format: {ext}\n"
            f"Supported formats: {', '.join(sorted(SUPPORTED_EXTENSIONS))}"
        )


def is_supported_format(input_file):
    """Check if a file has a supported format"""
    ext = Path(input_file).suffix.lower()
    return ext in SUPPORTED_EXTENSIONS


__all__ = [
    'BaseReader',
    'JSONSceneReader',
    'OBJReader',
    'create_reader',
    'is_supported_format',
    'read_animation_file',
    'JSON_EXTENSIONS',
    'OBJ_EXTENSIONS',
    'SUPPORTED_EXTENSIONS',
]
