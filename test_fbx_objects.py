#!/usr/bin/env python3
"""
Tests for id allocation, the object registry and connections
"""

import pytest

from core.errors import DanglingConnectionError
from core.fbx_objects import (
    IDENT_FLOOR,
    Connection,
    ConnectionRegistry,
    IdentAllocator,
    ObjectRegistry,
)
from core.fbx_values import IntSequence, StringValue
from exporters.fbx_writer import format_property_line


def test_allocator_starts_above_floor():
    allocator = IdentAllocator()
    assert allocator.allocate() == IDENT_FLOOR + 1
    assert allocator.allocate() == IDENT_FLOOR + 2
    assert allocator.last == IDENT_FLOOR + 2


def test_ids_strictly_increasing_across_types():
    registry = ObjectRegistry()
    types = ["Model", "AnimationCurveNode", "AnimationCurve"] * 7
    objects = [registry.create_object(t, f"{t}::x") for t in types]

    idents = [obj.ident for obj in objects]
    assert all(i > IDENT_FLOOR for i in idents)
    assert idents == sorted(idents)
    assert len(set(idents)) == len(idents)
    assert [obj.ident for obj in registry.objects()] == idents


def test_registries_do_not_share_counters():
    first = ObjectRegistry().create_object("Model", "Model::a")
    second = ObjectRegistry().create_object("Model", "Model::b")
    assert first.ident == second.ident == IDENT_FLOOR + 1


def test_declared_ident_definition_values():
    registry = ObjectRegistry()
    layer = registry.create_object("AnimationLayer", "AnimLayer::BaseLayer")

    assert layer.type_name == "AnimationLayer"
    assert layer.definition.values == [
        IntSequence((layer.ident,)),
        StringValue("AnimLayer::BaseLayer"),
        StringValue(""),
    ]
    assert layer.reference == layer.ident


def test_label_only_object():
    registry = ObjectRegistry()
    model = registry.create_object("Model", "Model::Cube", declares_ident=False)
    assert model.definition.values == []
    assert model.reference == "Model::Cube"
    assert model.ident in registry
    assert registry.get(model.ident) is model


def test_count_by_type_in_first_appearance_order():
    registry = ObjectRegistry()
    for type_name in ["Model", "AnimationCurveNode", "AnimationCurve", "AnimationCurve", "Model"]:
        registry.create_object(type_name)
    assert list(registry.count_by_type().items()) == [
        ("Model", 2), ("AnimationCurveNode", 1), ("AnimationCurve", 2),
    ]
    assert len(registry) == 5


def test_connect_objects_renders_ids_and_label():
    registry = ObjectRegistry()
    node = registry.create_object("AnimationCurveNode", "AnimCurveNode::T")
    curve = registry.create_object("AnimationCurve", "AnimCurve::")
    connections = ConnectionRegistry(registry)

    connections.connect(curve, node, "OP", "d|X")
    prop = connections.to_property().children[0]

    assert prop.comments == ["AnimCurve::, AnimCurveNode::T"]
    assert format_property_line(prop) == f'Connect: "OP", {curve.ident}, {node.ident}, "d|X"'


def test_connect_labels_renders_strings():
    connections = ConnectionRegistry(ObjectRegistry())
    connections.connect_labels("Material::Dummy", "Model::Cube")
    prop = connections.to_property().children[0]
    assert format_property_line(prop) == 'Connect: "OO", "Material::Dummy", "Model::Cube"'


def test_unknown_ident_rejected():
    registry = ObjectRegistry()
    model = registry.create_object("Model", "Model::Cube")
    connections = ConnectionRegistry(registry)

    with pytest.raises(DanglingConnectionError):
        connections.add(Connection("AnimCurveNode", "T", 99999, "Model", "Cube", model.ident, "OP", "Lcl Translation"))
    assert len(connections) == 0


def test_connections_keep_insertion_order():
    registry = ObjectRegistry()
    a = registry.create_object("A", "A::a")
    b = registry.create_object("B", "B::b")
    connections = ConnectionRegistry(registry)
    connections.connect(b, a)
    connections.connect(a, b)

    root = connections.to_property()
    assert root.name == "Connections"
    assert [c.values[1] for c in root.children] == [IntSequence((b.ident,)), IntSequence((a.ident,))]


def test_empty_connections_still_open_block():
    root = ConnectionRegistry(ObjectRegistry()).to_property()
    assert root.children == []
