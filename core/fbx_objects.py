#!/usr/bin/env python3
"""
FBX Objects Module
Identifier allocation, the object registry and the connection registry.

One export session owns one IdentAllocator, one ObjectRegistry and one
ConnectionRegistry. Nothing here is module-global, so independent exports
never share ids.
"""

from collections import OrderedDict
from dataclasses import dataclass
from typing import Dict, List, Optional, Union

from .errors import DanglingConnectionError
from .fbx_tree import FbxProperty
from .fbx_values import IntSequence, StringValue

# Ids at or below this are reserved by the format
IDENT_FLOOR = 6000

RELATION_OBJECT_OBJECT = "OO"
RELATION_OBJECT_PROPERTY = "OP"


class IdentAllocator:
    """Issues strictly increasing ids above a floor"""

    def __init__(self, floor: int = IDENT_FLOOR):
        self._counter = floor

    def allocate(self) -> int:
        self._counter += 1
        return self._counter

    @property
    def last(self) -> int:
        return self._counter


class FbxObject:
    """A registered object and the property that defines it under Objects

    Attributes:
        ident: Unique id, assigned once
        type_name: Definition node name ("Model", "AnimationCurve", ...)
        label: Name string, e.g. "Model::Cube" or "AnimCurveNode::T"
        declares_ident: Whether the definition line starts with the id.
                        Objects that don't are referenced by label.
        definition: Property emitted under the Objects root
    """

    def __init__(self, ident: int, type_name: str, label: str = "", declares_ident: bool = True):
        self.ident = ident
        self.label = label
        self.declares_ident = declares_ident
        self.definition = FbxProperty(type_name)

    @property
    def type_name(self) -> str:
        return self.definition.name

    @property
    def reference(self) -> Union[int, str]:
        """How connections point at this object"""
        return self.ident if self.declares_ident else self.label

    def __repr__(self):
        return f"FbxObject({self.ident}, {self.type_name!r}, {self.label!r})"


class ObjectRegistry:
    """Append-only arena of every object created during one export"""

    def __init__(self, allocator: Optional[IdentAllocator] = None):
        self.allocator = allocator or IdentAllocator()
        self._objects: List[FbxObject] = []
        self._by_ident: Dict[int, FbxObject] = {}

    def create_object(self, type_name: str, label: str = "", declares_ident: bool = True) -> FbxObject:
        """Allocate an id and register a new object with an empty definition

        When declares_ident is set the definition starts with the values
        `ident, "label", ""`; otherwise the caller fills it in.
        """
        obj = FbxObject(self.allocator.allocate(), type_name, label, declares_ident)
        if declares_ident:
            obj.definition.add_values(obj.ident, label, "")
        self._objects.append(obj)
        self._by_ident[obj.ident] = obj
        return obj

    def objects(self) -> List[FbxObject]:
        """All objects in creation order"""
        return list(self._objects)

    def get(self, ident: int) -> Optional[FbxObject]:
        return self._by_ident.get(ident)

    def count_by_type(self) -> "OrderedDict[str, int]":
        """Object count per type name, in order of first appearance"""
        counts = OrderedDict()
        for obj in self._objects:
            counts[obj.type_name] = counts.get(obj.type_name, 0) + 1
        return counts

    def __contains__(self, ident) -> bool:
        return ident in self._by_ident

    def __iter__(self):
        return iter(self._objects)

    def __len__(self):
        return len(self._objects)


@dataclass(frozen=True)
class Connection:
    """Directed, labeled edge between two endpoints

    An endpoint ref is the id of a registered object, or a
    "Type::name" label for an endpoint that is not registered
    (e.g. a dummy material).
    """
    from_type: str
    from_name: str
    from_ref: Union[int, str]
    to_type: str
    to_name: str
    to_ref: Union[int, str]
    relation: str = RELATION_OBJECT_OBJECT
    property_label: str = ""

    @property
    def comment(self) -> str:
        return f"{self.from_type}::{self.from_name}, {self.to_type}::{self.to_name}"

    def to_property(self) -> FbxProperty:
        prop = FbxProperty("Connect", self.relation)
        for ref in (self.from_ref, self.to_ref):
            prop.add_value(IntSequence((ref,)) if isinstance(ref, int) else StringValue(ref))
        if self.property_label:
            prop.add_value(self.property_label)
        prop.add_comment(self.comment)
        return prop


def _split_label(label: str):
    """'Model::Cube' -> ('Model', 'Cube')"""
    type_name, _, name = label.partition("::")
    return type_name, name


class ConnectionRegistry:
    """Append-only list of connections, checked against an ObjectRegistry"""

    def __init__(self, objects: ObjectRegistry):
        self.objects = objects
        self._connections: List[Connection] = []

    def add(self, connection: Connection) -> Connection:
        """Record a connection

        Raises:
            DanglingConnectionError: If an id endpoint is not registered
        """
        for ref in (connection.from_ref, connection.to_ref):
            if isinstance(ref, int) and ref not in self.objects:
                raise DanglingConnectionError(
                    f"Connection {connection.comment} references unknown object {ref}"
                )
        self._connections.append(connection)
        return connection

    def connect(self, from_obj: FbxObject, to_obj: FbxObject,
                relation: str = RELATION_OBJECT_OBJECT, property_label: str = "") -> Connection:
        """Connect two registered objects"""
        from_type, from_name = _split_label(from_obj.label)
        to_type, to_name = _split_label(to_obj.label)
        return self.add(Connection(
            from_type, from_name, from_obj.reference,
            to_type, to_name, to_obj.reference,
            relation, property_label,
        ))

    def connect_labels(self, from_label: str, to_label: str,
                       relation: str = RELATION_OBJECT_OBJECT, property_label: str = "") -> Connection:
        """Connect two endpoints known only by their "Type::name" labels"""
        from_type, from_name = _split_label(from_label)
        to_type, to_name = _split_label(to_label)
        return self.add(Connection(
            from_type, from_name, from_label,
            to_type, to_name, to_label,
            relation, property_label,
        ))

    def connections(self) -> List[Connection]:
        return list(self._connections)

    def to_property(self) -> FbxProperty:
        """Connections root with one Connect child per connection"""
        root = FbxProperty("Connections")
        root.open_block()
        for connection in self._connections:
            root.add_property(connection.to_property())
        return root

    def __iter__(self):
        return iter(self._connections)

    def __len__(self):
        return len(self._connections)
