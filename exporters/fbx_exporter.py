"""
FBX ASCII exporter

Pure Python FBX 6.1 ASCII writer, no external SDK required.

Export Strategy:
- Meshes: Model objects with transformed vertices, normals and reversed-winding polygons
- Animation: one curve node per channel (T/R/S) and one curve per axis, sampled per frame
- Every mesh is parented to a "Scene" model and connected to a dummy material,
  without which the consumer does not show the mesh

Document layout: attribution comments, FBXHeaderExtension, Objects,
Definitions, Connections.
"""

import dataclasses
import re
import traceback
from dataclasses import dataclass, field
from datetime import datetime
from typing import List

from core.fbx_objects import ConnectionRegistry, ObjectRegistry
from core.fbx_tree import FbxProperty
from core.scene_data import ExportSettings, SceneData
from core.transform_math import as_matrix
from exporters.base_exporter import BaseExporter
from exporters.fbx_animation import (
    build_animation_graph,
    create_animation_layer,
    create_animation_stack,
    get_key_times,
)
from exporters.fbx_geometry import create_mesh_object
from exporters.fbx_writer import render_document, write_document

VERSION_MAJOR = 6
VERSION_MINOR = 1
VERSION_RELEASE = 0
FBX_VERSION = VERSION_MAJOR * 1000 + VERSION_MINOR * 100 + VERSION_RELEASE * 10
FBX_HEADER_VERSION = 1003

EXPORTER_ATTRIBUTION = "Written by fbx-ascii-exporter, a pure Python FBX ASCII writer"


@dataclass
class FbxDocument:
    """Everything built for one export

    Attributes:
        header: FBXHeaderExtension root
        objects_root: Objects root (object definitions in creation order)
        definitions: Definitions root (object counts per type)
        connections_root: Connections root
        objects: Registry the ids were allocated from
        connections: Connection registry
        comments: Attribution lines for the top of the file
    """
    header: FbxProperty
    objects_root: FbxProperty
    definitions: FbxProperty
    connections_root: FbxProperty
    objects: ObjectRegistry
    connections: ConnectionRegistry
    comments: List[str] = field(default_factory=list)

    @property
    def roots(self) -> List[FbxProperty]:
        return [self.header, self.objects_root, self.definitions, self.connections_root]


class FBXExporter(BaseExporter):
    """FBX ASCII file exporter

    Each build_document() call owns its own id allocator and registries,
    so one exporter instance can run any number of exports.
    """

    def __init__(self, progress_callback=None, settings=None):
        super().__init__(progress_callback)
        self.settings = settings or ExportSettings()

    def get_format_name(self):
        return "FBX ASCII"

    def get_file_extension(self):
        return "fbx"

    def get_comments(self):
        """Attribution block; the version line must come first for the file to load"""
        return [
            f"FBX {VERSION_MAJOR}.{VERSION_MINOR}.{VERSION_RELEASE} project file",
            f"Created by {self.settings.creator}",
            EXPORTER_ATTRIBUTION,
        ] + list(self.settings.comments)

    def build_document(self, meshes, transform=None, animations=None) -> FbxDocument:
        """Build the full property tree for a set of meshes

        Args:
            meshes: MeshData list
            transform: 4x4 matrix applied to every mesh (None = identity)
            animations: Optional dict of mesh name -> AnimObject

        Returns:
            FbxDocument
        """
        settings = self.settings
        animations = animations or {}
        matrix = as_matrix(transform)

        registry = ObjectRegistry()
        connections = ConnectionRegistry(registry)
        scene_label = f"Model::{self._sanitize_name(settings.scene_name)}"
        material_label = f"Material::{self._sanitize_name(settings.material_name)}"

        mesh_objects = []
        used_names = {self._sanitize_name(settings.scene_name)}
        for mesh in meshes:
            export_name = self._unique_name(self._sanitize_name(mesh.name), used_names)
            export_mesh = dataclasses.replace(mesh, name=export_name)
            mesh_obj = create_mesh_object(export_mesh, matrix, registry)
            mesh_objects.append((mesh, mesh_obj))

            connections.connect_labels(mesh_obj.label, scene_label)
            connections.connect_labels(material_label, mesh_obj.label)

        layer = create_animation_layer(registry)

        stop_time = 0
        animated = set()
        for mesh, mesh_obj in mesh_objects:
            anim = animations.get(mesh.name)
            # A repeated source name animates only its first mesh
            if anim is None or mesh.name in animated:
                continue
            animated.add(mesh.name)
            self.log(f"  Animating {mesh_obj.label}: {len(anim.frames)} frames")
            build_animation_graph(anim, mesh_obj, layer, registry, connections, settings)
            stop_time = max([stop_time] + get_key_times(anim, settings))

        create_animation_stack(registry, connections, layer, stop_time)

        objects_root = FbxProperty("Objects").open_block()
        for obj in registry:
            objects_root.add_property(obj.definition)

        return FbxDocument(
            header=self._header_property(),
            objects_root=objects_root,
            definitions=self._definitions_property(registry),
            connections_root=connections.to_property(),
            objects=registry,
            connections=connections,
            comments=self.get_comments(),
        )

    def export_lines(self, write_line, meshes, transform=None, animations=None):
        """Build and stream a document into write_line

        The tree is validated before the first line is written.
        """
        document = self.build_document(meshes, transform, animations)
        write_document(write_line, document.roots, document.comments)
        return document

    def render(self, meshes, transform=None, animations=None):
        """Build a document and return its lines"""
        document = self.build_document(meshes, transform, animations)
        return render_document(document.roots, document.comments)

    def export(self, scene_data: SceneData, output_path, name, transform=None):
        """Main export method using SceneData

        The whole document is rendered in memory before the file is opened,
        so a failed export never leaves a partial file.

        Args:
            scene_data: SceneData with meshes and animations
            output_path: Output directory
            name: File base name
            transform: Optional 4x4 matrix applied to all meshes
        """
        try:
            self.log("Exporting FBX ASCII...")

            output_dir = self.validate_output_path(output_path)
            fbx_file = output_dir / f"{name}.{self.get_file_extension()}"

            for mesh in scene_data.meshes:
                self.log(f"  Processing mesh: {mesh.name} ({len(mesh.vertices)} vertices)")

            lines = self.render(scene_data.meshes, transform, scene_data.animations)

            with open(fbx_file, 'w', encoding='utf-8') as f:
                f.write('\n'.join(lines))
                f.write('\n')

            self.log(f"FBX file created: {fbx_file.name}")

            return {
                'success': True,
                'fbx_file': str(fbx_file),
                'files': [str(fbx_file)],
                'message': f"FBX export complete: {fbx_file.name}"
            }

        except Exception as e:
            error_msg = f"FBX export failed: {type(e).__name__}: {e}"
            self.log(f"ERROR: {error_msg}")
            self.log(traceback.format_exc())
            return {
                'success': False,
                'message': error_msg,
                'files': []
            }

    # === FBX STRUCTURE ===

    def _header_property(self):
        """FBXHeaderExtension root"""
        stamp = self.settings.timestamp or datetime.now()

        header = FbxProperty("FBXHeaderExtension")
        header.add_property("FBXHeaderVersion", FBX_HEADER_VERSION)
        header.add_property("FBXVersion", FBX_VERSION)

        created = header.add_property("CreationTimeStamp")
        created.add_property("Version", 1000)
        created.add_property("Year", stamp.year)
        created.add_property("Month", stamp.month)
        created.add_property("Day", stamp.day)
        created.add_property("Hour", stamp.hour)
        created.add_property("Minute", stamp.minute)
        created.add_property("Second", stamp.second)
        created.add_property("Millisecond", stamp.microsecond // 1000)

        header.add_property("Creator", self.settings.creator)
        return header

    def _definitions_property(self, registry):
        """Definitions root declaring how many objects of each type follow"""
        definitions = FbxProperty("Definitions")
        definitions.add_property("Version", 100)
        definitions.add_property("Count", len(registry))
        for type_name, count in registry.count_by_type().items():
            object_type = definitions.add_property("ObjectType", type_name)
            object_type.add_property("Count", count)
        return definitions

    # === UTILITIES ===

    def _sanitize_name(self, name):
        """Sanitize name for FBX"""
        sanitized = re.sub(r'[^a-zA-Z0-9_]', '_', name)
        if sanitized and sanitized[0].isdigit():
            sanitized = f"obj_{sanitized}"
        return sanitized or "unnamed"

    def _unique_name(self, name, used_names):
        """Append _1, _2, ... until name is unused; records the result in used_names

        Models are connected by label, so two meshes may not share one.
        """
        unique = name
        suffix = 1
        while unique in used_names:
            unique = f"{name}_{suffix}"
            suffix += 1
        used_names.add(unique)
        return unique
