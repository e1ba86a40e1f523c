#!/usr/bin/env python3
"""
Base Exporter Module
Abstract base class ensuring a consistent exporter interface

Exporters receive SceneData, never reader objects, so they stay
independent of the input format.
"""

from abc import ABC, abstractmethod
from pathlib import Path
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from core.scene_data import SceneData


class BaseExporter(ABC):
    """Abstract base class for format exporters

    Key principles:
    - Single Responsibility: Each exporter handles ONE format
    - Shared Utilities: Logging and path validation live here
    - Format Agnostic: Works with SceneData, not reader objects
    """

    def __init__(self, progress_callback=None):
        """Initialize exporter

        Args:
            progress_callback: Optional function to call for progress updates
                              Signature: callback(message: str) -> None
        """
        self.progress_callback = progress_callback

    def log(self, message):
        """Send progress/status message

        Args:
            message: Message to log
        """
        if self.progress_callback:
            self.progress_callback(message)
        print(message)

    @abstractmethod
    def export(self, scene_data: 'SceneData', output_path, name):
        """Export scene data to a file in output_path

        Args:
            scene_data: SceneData with meshes and their recorded animation
            output_path: Output directory path (Path object or string)
            name: Base name for the written file

        Returns:
            dict: Export results, with at least:
                  - 'success': bool
                  - 'files': list of created file paths
                  - 'message': str status message
        """
        pass

    @abstractmethod
    def get_format_name(self):
        """Return human-readable format name"""
        pass

    @abstractmethod
    def get_file_extension(self):
        """Return primary file extension without dot"""
        pass

    def validate_output_path(self, output_path):
        """Validate and create output directory if needed

        Args:
            output_path: Directory path to validate

        Returns:
            Path: Validated Path object

        Raises:
            ValueError: If path is invalid
        """
        path = Path(output_path)

        try:
            path.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise ValueError(f"Cannot create output directory {path}: {e}")

        if not path.is_dir():
            raise ValueError(f"Output path is not a directory: {path}")

        return path

    def get_export_summary(self, result):
        """Generate human-readable summary of export results

        Args:
            result: Export result dict from export() method

        Returns:
            str: Formatted summary text
        """
        lines = []
        status = "Complete" if result.get('success') else "Failed"
        lines.append(f"{self.get_format_name()} Export {status}")

        files = result.get('files', [])
        lines.append(f"  Files created: {len(files)}")
        for file_path in files:
            lines.append(f"    - {Path(file_path).name}")

        if 'message' in result:
            lines.append(f"  {result['message']}")

        return "\n".join(lines)
