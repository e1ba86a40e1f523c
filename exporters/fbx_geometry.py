#!/usr/bin/env python3
"""
FBX Geometry Module
Converts a triangle or quad mesh into an FBX `Model` object.

Polygon index encoding:
- indices are grouped per polygon (3 or 4 corners)
- each polygon is reversed (consumers import with flipped winding)
- the last index of each polygon becomes -(index + 1) to mark its end
"""

from core.errors import MalformedMeshError, UnsupportedTopologyError
from core.fbx_values import FloatSequence, IntSequence
from core.scene_data import MeshTopology
from core.transform_math import transform_points, transform_vectors

POLYGON_SIZES = {
    MeshTopology.TRIANGLES: 3,
    MeshTopology.QUADS: 4,
}

REVERSE_POLYGON_ORDER = True

# Layer elements the consumer expects on layer 0, whether or not data exists
LAYER_ELEMENT_TYPES = [
    "LayerElementNormal",
    "LayerElementSmoothing",
    "LayerElementUV",
    "LayerElementTexture",
    "LayerElementMaterial",
]


def get_polygon_size(topology):
    """Corner count per polygon

    Raises:
        UnsupportedTopologyError: For anything but triangles and quads
    """
    try:
        return POLYGON_SIZES[topology]
    except KeyError:
        raise UnsupportedTopologyError(f"Meshes of topology {topology} are unsupported") from None


def encode_polygon_indices(indices, topology):
    """Build the PolygonVertexIndex sequence for a flat index buffer

    Example: triangles [0, 1, 2] -> reversed [2, 1, 0] -> [2, 1, -1]

    Raises:
        UnsupportedTopologyError: For anything but triangles and quads
        MalformedMeshError: If the index count is not a whole number of polygons
    """
    poly_size = get_polygon_size(topology)
    indices = [int(i) for i in indices]
    if len(indices) % poly_size != 0:
        raise MalformedMeshError(
            f"{len(indices)} indices do not divide into polygons of {poly_size}"
        )

    fbx_indices = []
    for start in range(0, len(indices), poly_size):
        poly = indices[start:start + poly_size]
        if REVERSE_POLYGON_ORDER:
            poly.reverse()
        # Negative last index marks the end of the polygon
        poly[-1] = -(poly[-1] + 1)
        fbx_indices.extend(poly)

    return fbx_indices


def create_mesh_object(mesh, transform, registry):
    """Register a Model object holding the mesh geometry

    Args:
        mesh: MeshData (vertices, normals, indices, topology, name)
        transform: 4x4 affine matrix applied to positions and normals (None = identity)
        registry: ObjectRegistry of the current export

    Returns:
        FbxObject: The registered model. Its definition line carries no id;
                   connections reference it as "Model::<name>".
    """
    # Build every value before registering anything
    fbx_indices = IntSequence(tuple(encode_polygon_indices(mesh.get_indices(), mesh.get_topology())))
    vertices = FloatSequence(tuple(transform_points(mesh.vertices, transform).reshape(-1)))
    normals = None
    if len(mesh.normals):
        normals = FloatSequence(tuple(transform_vectors(mesh.normals, transform).reshape(-1)))

    label = f"Model::{mesh.name}"
    obj = registry.create_object("Model", label, declares_ident=False)
    model = obj.definition
    model.add_values(label, "Mesh")

    model.add_property("Version", 232)
    model.add_property("Vertices", vertices)
    model.add_property("PolygonVertexIndex", fbx_indices)
    model.add_property("GeometryVersion", 124)

    layer_number = 0
    normal_layer = model.add_property("LayerElementNormal", layer_number)
    normal_layer.add_property("Version", 101)
    normal_layer.add_property("Name", "")
    # ByVertex is rejected by the consumer ("Unsupported wedge mapping mode")
    normal_layer.add_property("MappingInformationType", "ByPolygonVertex")
    normal_layer.add_property("ReferenceInformationType", "Direct")
    if normals is not None:
        normal_layer.add_property("Normals", normals)

    layer = model.add_property("Layer", layer_number)
    layer.add_property("Version", 100)
    for element_type in LAYER_ELEMENT_TYPES:
        element = layer.add_property("LayerElement")
        element.add_property("Type", element_type)
        element.add_property("TypedIndex", 0)

    return obj
