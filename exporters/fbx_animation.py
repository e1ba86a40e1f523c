#!/usr/bin/env python3
"""
FBX Animation Module
Builds the animation object graph for one animated object.

For each channel (translation, rotation, scale) one AnimationCurveNode is
created, plus one AnimationCurve per axis:

    AnimationCurve --OP "d|X"--> AnimationCurveNode --OP "Lcl Translation"--> Model
                                 AnimationCurveNode --OO--> AnimationLayer

Frames are sampled directly; no resampling or curve fitting happens here.
"""

from dataclasses import dataclass, field
from typing import Dict, List

from core.errors import EmptyAnimationError
from core.fbx_objects import RELATION_OBJECT_OBJECT, RELATION_OBJECT_PROPERTY
from core.fbx_time import frame_index_to_ktime, seconds_to_ktime
from core.fbx_values import FloatSequence, IntSequence
from core.scene_data import ExportSettings, KeyTiming

AXES = ("X", "Y", "Z")

# (curve node suffix, target property, AnimObject accessor)
CHANNELS = [
    ("T", "Lcl Translation", "get_position_curve_data"),
    ("R", "Lcl Rotation", "get_rotation_curve_data"),
    ("S", "Lcl Scaling", "get_scale_curve_data"),
]

KEY_VERSION = 4008
# Cubic | TangeantAuto | GenericTimeIndependent | GenericClampProgressive
KEY_ATTR_FLAGS = 24840


@dataclass
class AnimationGraph:
    """Objects created for one animated target

    Attributes:
        curve_nodes: Curve node per channel suffix ("T", "R", "S")
        curves: Curve per (channel suffix, axis), e.g. ("T", "X")
    """
    curve_nodes: Dict[str, object] = field(default_factory=dict)
    curves: Dict[tuple, object] = field(default_factory=dict)


def get_key_times(anim, settings):
    """KeyTime for every frame of an AnimObject"""
    if settings.key_timing == KeyTiming.FRAME_TIME:
        return [seconds_to_ktime(frame.time) for frame in anim.frames]
    return [frame_index_to_ktime(i, settings.frame_rate) for i in range(len(anim.frames))]


def create_animation_layer(registry):
    layer = registry.create_object("AnimationLayer", "AnimLayer::BaseLayer")
    layer.definition.open_block()
    return layer


def create_animation_stack(registry, connections, layer, stop_time):
    """Register the take that owns the animation layer

    Args:
        stop_time: Last key time in KTime
    """
    stack = registry.create_object("AnimationStack", "AnimStack::Take 001")
    props = stack.definition.add_property("Properties70")
    props.add_property("P").add_values("LocalStop", "KTime", "Time", "", int(stop_time))
    props.add_property("P").add_values("ReferenceStop", "KTime", "Time", "", int(stop_time))
    connections.connect(layer, stack, RELATION_OBJECT_OBJECT)
    return stack


def add_animation_curve_node(registry, suffix, default_value):
    """Register a curve node with d|X, d|Y, d|Z initialised to default_value"""
    node = registry.create_object("AnimationCurveNode", f"AnimCurveNode::{suffix}")
    props = node.definition.add_property("Properties70")
    for axis, value in zip(AXES, default_value):
        props.add_property("P").add_values(f"d|{axis}", "Number", "", "A", float(value))
    return node


def add_animation_curve(registry, key_times, key_values):
    """Register one AnimationCurve holding a key per frame"""
    key_count = len(key_values)
    curve = registry.create_object("AnimationCurve", "AnimCurve::")
    definition = curve.definition

    definition.add_property("Default", 0)
    definition.add_property("KeyVer", KEY_VERSION)

    key_time = definition.add_property("KeyTime", f"*{key_count}")
    key_time.add_property("a", IntSequence(tuple(key_times)))

    key_value = definition.add_property("KeyValueFloat", f"*{key_count}")
    key_value.add_property("a", FloatSequence(tuple(key_values)))

    flags = definition.add_property("KeyAttrFlags", "*1")
    flags.add_comment("KeyAttrFlags = Cubic | TangeantAuto | GenericTimeIndependent | GenericClampProgressive")
    flags.add_property("a", KEY_ATTR_FLAGS)

    attr_data = definition.add_property("KeyAttrDataFloat", "*4")
    attr_data.add_property("a", IntSequence((0, 0, 0, 0)))

    ref_count = definition.add_property("KeyAttrRefCount", "*1")
    ref_count.add_property("a", key_count)

    return curve


def build_animation_graph(anim, target, layer, registry, connections, settings=None):
    """Create curve nodes, curves and connections animating target

    Args:
        anim: AnimObject with at least one frame
        target: Registered object receiving Lcl Translation/Rotation/Scaling
        layer: Registered AnimationLayer object
        registry: ObjectRegistry of the current export
        connections: ConnectionRegistry of the current export
        settings: ExportSettings (frame rate and key timing)

    Returns:
        AnimationGraph

    Raises:
        EmptyAnimationError: If anim has no frames (nothing is registered)
    """
    if not anim.frames:
        raise EmptyAnimationError(f"Animation '{anim.name}' has no frames")

    settings = settings or ExportSettings()
    key_times = get_key_times(anim, settings)
    graph = AnimationGraph()

    # Curve data is read per channel; rotation is decomposed from quaternions here
    channel_data: List[tuple] = []
    for suffix, _, accessor in CHANNELS:
        axis_values = getattr(anim, accessor)()
        first_value = tuple(values[0] for values in axis_values)
        graph.curve_nodes[suffix] = add_animation_curve_node(registry, suffix, first_value)
        channel_data.append((suffix, axis_values))

    for suffix, axis_values in channel_data:
        for axis, values in zip(AXES, axis_values):
            graph.curves[(suffix, axis)] = add_animation_curve(registry, key_times, values)

    for suffix, target_property, _ in CHANNELS:
        connections.connect(graph.curve_nodes[suffix], target, RELATION_OBJECT_PROPERTY, target_property)

    for suffix, _, _ in CHANNELS:
        connections.connect(graph.curve_nodes[suffix], layer, RELATION_OBJECT_OBJECT)

    for suffix, _, _ in CHANNELS:
        node = graph.curve_nodes[suffix]
        for axis in AXES:
            connections.connect(graph.curves[(suffix, axis)], node, RELATION_OBJECT_PROPERTY, f"d|{axis}")

    return graph
