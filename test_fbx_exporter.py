#!/usr/bin/env python3
"""
Tests for FBX document assembly and file export
"""

from datetime import datetime

import pytest

from core.errors import EmptyAnimationError
from core.fbx_objects import IDENT_FLOOR
from core.scene_data import AnimObject, ExportSettings, MeshData, MeshTopology, SceneData
from exporters.fbx_exporter import EXPORTER_ATTRIBUTION, FBXExporter, FBX_VERSION
from exporters.fbx_writer import format_property_line

FIXED_TIME = datetime(2024, 1, 2, 3, 4, 5)


def make_mesh(name="Tri", topology=MeshTopology.TRIANGLES):
    return MeshData(
        name=name,
        vertices=[(0.0, 0.0, 0.0), (1.0, 0.0, 0.0), (0.0, 1.0, 0.0)],
        normals=[(0.0, 0.0, 1.0)] * 3,
        indices=[0, 1, 2],
        topology=topology,
    )


def make_anim(name="Tri", frames=2):
    anim = AnimObject(name=name)
    for i in range(frames):
        anim.add_frame((float(i), 0.0, 0.0), (0.0, 0.0, 0.0, 1.0), i / 60.0)
    return anim


def make_exporter(messages=None, **settings):
    settings.setdefault('timestamp', FIXED_TIME)
    callback = messages.append if messages is not None else None
    return FBXExporter(progress_callback=callback, settings=ExportSettings(**settings))


def test_root_order():
    document = make_exporter().build_document([make_mesh()], animations={"Tri": make_anim()})
    assert [root.name for root in document.roots] == [
        "FBXHeaderExtension", "Objects", "Definitions", "Connections",
    ]


def test_header_values():
    header = make_exporter(creator="Test Suite").build_document([make_mesh()]).header
    assert FBX_VERSION == 6100
    assert format_property_line(header.find("FBXHeaderVersion")) == "FBXHeaderVersion: 1003"
    assert format_property_line(header.find("FBXVersion")) == "FBXVersion: 6100"
    assert format_property_line(header.find("Creator")) == 'Creator: "Test Suite"'
    assert format_property_line(header.find("CreationTimeStamp").find("Year")) == "Year: 2024"


def test_rendered_document_starts_with_version_comment():
    lines = make_exporter(comments=["extra"]).render([make_mesh()])
    assert lines[:5] == [
        "; FBX 6.1.0 project file",
        "; Created by FBX ASCII Exporter",
        "; " + EXPORTER_ATTRIBUTION,
        "; extra",
        "",
    ]
    assert lines[5] == "FBXHeaderExtension: "
    assert "\t\tYear: 2024" in lines
    assert "\tPolygonVertexIndex: 2, 1, -1" not in lines
    assert "\t\tPolygonVertexIndex: 2, 1, -1" in lines


def test_export_lines_streams_to_sink():
    sink = []
    document = make_exporter().export_lines(sink.append, [make_mesh()])
    assert sink == make_exporter().render([make_mesh()])
    assert len(document.objects) == 3  # model, layer, stack


def test_objects_in_creation_order():
    document = make_exporter().build_document([make_mesh("A"), make_mesh("B")], animations={"B": make_anim("B")})
    definitions = document.objects_root.children
    assert definitions == [obj.definition for obj in document.objects]
    assert [d.name for d in definitions[:3]] == ["Model", "Model", "AnimationLayer"]
    assert definitions[-1].name == "AnimationStack"


def test_definitions_count_every_object():
    document = make_exporter().build_document([make_mesh()], animations={"Tri": make_anim()})
    definitions = document.definitions

    assert format_property_line(definitions.find("Count")) == f"Count: {len(document.objects)}"
    counts = {
        object_type.values[0].text: object_type.find("Count").values[0].numbers[0]
        for object_type in definitions.find_all("ObjectType")
    }
    assert counts == {
        "Model": 1,
        "AnimationLayer": 1,
        "AnimationCurveNode": 3,
        "AnimationCurve": 9,
        "AnimationStack": 1,
    }


def test_scene_and_material_connections_come_first():
    document = make_exporter(material_name="Sprite").build_document([make_mesh()], animations={"Tri": make_anim()})
    connects = document.connections_root.children

    assert format_property_line(connects[0]) == 'Connect: "OO", "Model::Tri", "Model::Scene"'
    assert format_property_line(connects[1]) == 'Connect: "OO", "Material::Sprite", "Model::Tri"'
    assert len(connects) == 2 + 15 + 1


def test_no_dangling_connection_ids():
    document = make_exporter().build_document(
        [make_mesh("A"), make_mesh("B")],
        animations={"A": make_anim("A"), "B": make_anim("B", frames=5)},
    )
    for connection in document.connections:
        for ref in (connection.from_ref, connection.to_ref):
            if isinstance(ref, int):
                assert ref in document.objects


def test_stack_stops_at_last_key():
    document = make_exporter().build_document([make_mesh()], animations={"Tri": make_anim(frames=61)})
    stack = document.objects_root.children[-1]
    stops = [format_property_line(p) for p in stack.find("Properties70").find_all("P")]
    assert stops == [
        'P: "LocalStop", "KTime", "Time", "", 46186158000',
        'P: "ReferenceStop", "KTime", "Time", "", 46186158000',
    ]


def test_exports_are_independent():
    exporter = make_exporter()
    first = exporter.build_document([make_mesh()])
    second = exporter.build_document([make_mesh()])
    assert first.objects.objects()[0].ident == second.objects.objects()[0].ident == IDENT_FLOOR + 1


def test_mesh_names_are_sanitized_but_keep_their_animation():
    document = make_exporter().build_document([make_mesh("my mesh")], animations={"my mesh": make_anim()})
    model = document.objects.objects()[0]
    assert model.label == "Model::my_mesh"
    assert len(document.connections) == 2 + 15 + 1


def lcl_targets(document):
    return [c.to_ref for c in document.connections if c.property_label.startswith("Lcl ")]


def test_colliding_mesh_names_get_distinct_labels():
    document = make_exporter().build_document(
        [make_mesh("a b"), make_mesh("a_b")],
        animations={"a b": make_anim("a b")},
    )
    labels = [obj.label for obj in document.objects if obj.type_name == "Model"]

    assert labels == ["Model::a_b", "Model::a_b_1"]
    assert lcl_targets(document) == ["Model::a_b"] * 3


def test_repeated_source_names_animate_first_mesh_only():
    document = make_exporter().build_document(
        [make_mesh("Cube"), make_mesh("Cube"), make_mesh("Cube")],
        animations={"Cube": make_anim("Cube")},
    )
    labels = [obj.label for obj in document.objects if obj.type_name == "Model"]

    assert labels == ["Model::Cube", "Model::Cube_1", "Model::Cube_2"]
    assert lcl_targets(document) == ["Model::Cube"] * 3


def test_mesh_named_like_scene_is_renamed():
    document = make_exporter().build_document([make_mesh("Scene")])
    connects = [format_property_line(c) for c in document.connections_root.children]
    assert connects[0] == 'Connect: "OO", "Model::Scene_1", "Model::Scene"'


def test_attribution_ignores_creator():
    comments = make_exporter(creator="Someone Else").get_comments()
    assert comments == ["FBX 6.1.0 project file", "Created by Someone Else", EXPORTER_ATTRIBUTION]


def test_empty_animation_fails_build():
    with pytest.raises(EmptyAnimationError):
        make_exporter().build_document([make_mesh()], animations={"Tri": AnimObject(name="Tri")})


def test_export_writes_file(tmp_path):
    messages = []
    scene = SceneData(meshes=[make_mesh()], animations={"Tri": make_anim()})
    result = make_exporter(messages).export(scene, tmp_path / "out", "shot")

    assert result['success'] is True
    fbx_file = tmp_path / "out" / "shot.fbx"
    assert result['files'] == [str(fbx_file)]
    text = fbx_file.read_text(encoding='utf-8')
    assert text.startswith("; FBX 6.1.0 project file\n")
    assert "PolygonVertexIndex: 2, 1, -1" in text
    assert any("FBX file created" in m for m in messages)


@pytest.mark.parametrize("scene", [
    SceneData(meshes=[make_mesh(topology=MeshTopology.LINES)]),
    SceneData(meshes=[make_mesh()], animations={"Tri": AnimObject(name="Tri")}),
])
def test_failed_export_writes_no_file(tmp_path, scene):
    messages = []
    result = make_exporter(messages).export(scene, tmp_path, "broken")

    assert result['success'] is False
    assert result['files'] == []
    assert not (tmp_path / "broken.fbx").exists()
    assert any(m.startswith("ERROR: FBX export failed") for m in messages)


def test_export_summary():
    exporter = make_exporter()
    summary = exporter.get_export_summary({'success': True, 'files': ['/tmp/a.fbx'], 'message': 'done'})
    assert summary.splitlines() == ["FBX ASCII Export Complete", "  Files created: 1", "    - a.fbx", "  done"]
