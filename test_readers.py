#!/usr/bin/env python3
"""
Tests for the JSON scene and OBJ readers
"""

import json

import pytest

from core.errors import UnsupportedTopologyError
from core.scene_data import MeshTopology
from readers import (
    JSONSceneReader,
    OBJReader,
    create_reader,
    is_supported_format,
    read_animation_file,
)

QUAD_OBJ = """
# unit quad
v 0 0 0
v 1 0 0
v 1 1 0
v 0 1 0
vn 0 0 1
o Plane
f 1//1 2//1 3//1 4//1
"""

SCENE = {
    "meshes": [
        {
            "name": "Cube",
            "vertices": [[0, 0, 0], [1, 0, 0], [0, 1, 0]],
            "normals": [[0, 0, 1], [0, 0, 1], [0, 0, 1]],
            "indices": [0, 1, 2],
            "topology": "Triangles",
        }
    ],
    "animations": {
        "Cube": [
            {"position": [0, 0, 0], "rotation": [0, 0, 0, 1], "time": 0.0},
            {"position": [1, 1, 1]},
        ]
    },
}


# === OBJ ===

def test_obj_quad():
    meshes = OBJReader.parse(QUAD_OBJ.splitlines())

    assert len(meshes) == 1
    mesh = meshes[0]
    assert mesh.name == "Plane"
    assert mesh.topology == MeshTopology.QUADS
    assert mesh.indices == [0, 1, 2, 3]
    assert mesh.vertices[2] == (1.0, 1.0, 0.0)
    assert mesh.normals == [(0.0, 0.0, 1.0)] * 4


def test_obj_shared_corners_are_deduplicated():
    text = """
v 0 0 0
v 1 0 0
v 1 1 0
v 0 1 0
f 1 2 3
f 1 3 4
"""
    mesh = OBJReader.parse(text.splitlines(), default_name="tris")[0]

    assert mesh.name == "tris"
    assert mesh.topology == MeshTopology.TRIANGLES
    assert len(mesh.vertices) == 4
    assert mesh.indices == [0, 1, 2, 0, 2, 3]
    assert mesh.normals == []


def test_obj_split_normals_make_separate_vertices():
    text = """
v 0 0 0
v 1 0 0
v 0 1 0
vn 0 0 1
vn 0 0 -1
f 1//1 2//1 3//1
f 1//2 3//2 2//2
"""
    mesh = OBJReader.parse(text.splitlines())[0]
    assert len(mesh.vertices) == 6
    assert mesh.normals[3] == (0.0, 0.0, -1.0)


def test_obj_negative_indices():
    text = """
v 0 0 0
v 1 0 0
v 0 1 0
f -3 -2 -1
"""
    mesh = OBJReader.parse(text.splitlines())[0]
    assert mesh.vertices == [(0.0, 0.0, 0.0), (1.0, 0.0, 0.0), (0.0, 1.0, 0.0)]


def test_obj_objects_split_meshes():
    text = QUAD_OBJ + "o Second\nf 1 2 3\no Empty\n"
    meshes = OBJReader.parse(text.splitlines())
    assert [m.name for m in meshes] == ["Plane", "Second"]


def test_obj_mixed_face_sizes_rejected():
    text = """
v 0 0 0
v 1 0 0
v 1 1 0
v 0 1 0
f 1 2 3
f 1 2 3 4
"""
    with pytest.raises(UnsupportedTopologyError):
        OBJReader.parse(text.splitlines())


def test_obj_reader_uses_file_stem(tmp_path):
    obj_file = tmp_path / "crate.obj"
    obj_file.write_text("v 0 0 0\nv 1 0 0\nv 0 1 0\nf 1 2 3\n", encoding='utf-8')

    scene = create_reader(obj_file).extract_scene_data()
    assert [m.name for m in scene.meshes] == ["crate"]
    assert scene.animations == {}
    assert scene.source_format_name == "OBJ"


# === JSON ===

def test_json_scene(tmp_path):
    scene_file = tmp_path / "scene.json"
    scene_file.write_text(json.dumps(SCENE), encoding='utf-8')

    reader = create_reader(scene_file)
    assert isinstance(reader, JSONSceneReader)

    scene = reader.extract_scene_data()
    mesh = scene.get_mesh_by_name("Cube")
    assert mesh.topology == MeshTopology.TRIANGLES
    assert mesh.indices == [0, 1, 2]

    frames = scene.animations["Cube"].frames
    assert len(frames) == 2
    assert frames[1].rotation == (0.0, 0.0, 0.0, 1.0)
    assert frames[1].scale == (1.0, 1.0, 1.0)
    assert frames[1].time == pytest.approx(1 / 60.0)


def test_json_unknown_topology(tmp_path):
    scene_file = tmp_path / "bad.json"
    scene_file.write_text(json.dumps({"meshes": [{"name": "x", "topology": "hexagons"}]}), encoding='utf-8')

    with pytest.raises(ValueError, match="hexagons"):
        create_reader(scene_file).get_meshes()


@pytest.mark.parametrize("payload", [SCENE["animations"], {"animations": SCENE["animations"]}])
def test_read_animation_file(tmp_path, payload):
    anim_file = tmp_path / "anim.json"
    anim_file.write_text(json.dumps(payload), encoding='utf-8')

    animations = read_animation_file(anim_file)
    assert list(animations) == ["Cube"]
    assert animations["Cube"].name == "Cube"


# === FACTORY ===

def test_supported_formats():
    assert is_supported_format("a.JSON")
    assert is_supported_format("b.obj")
    assert not is_supported_format("c.abc")


def test_create_reader_rejects_unknown_extension():
    with pytest.raises(ValueError, match="Unsupported file format"):
        create_reader("scene.fbx")
