#!/usr/bin/env python3
"""
FBX Tree Module
The FBX ASCII document is a tree of named properties:

    ; comment
    Name: value, value
    {
        Child: value
    }

FbxProperty nodes are append-only. A node's children list stays None until
the first child is added (or open_block() is called); only nodes with a
non-None children list get a brace block when written.
"""

from typing import List, Optional

from .fbx_values import make_value, FbxValue


class FbxProperty:
    """One `Name: values` line plus its comments and child block"""

    def __init__(self, name: str, *values):
        self.name = name
        self.values: List[FbxValue] = []
        self.comments: List[str] = []
        self.children: Optional[List['FbxProperty']] = None
        self.add_values(*values)

    def add_value(self, value) -> 'FbxProperty':
        """Append a value (plain Python values are converted); returns self"""
        self.values.append(make_value(value))
        return self

    def add_values(self, *values) -> 'FbxProperty':
        for value in values:
            self.add_value(value)
        return self

    def add_property(self, name_or_property, value=None) -> 'FbxProperty':
        """Append a child and return it

        Args:
            name_or_property: Child name, or an existing FbxProperty to adopt
            value: Optional single value for a newly created child
        """
        if isinstance(name_or_property, FbxProperty):
            child = name_or_property
        else:
            child = FbxProperty(name_or_property)
            if value is not None:
                child.add_value(value)

        self.open_block()
        self.children.append(child)
        return child

    def add_comment(self, comment) -> 'FbxProperty':
        """Append one comment line, or each line of a list"""
        if isinstance(comment, (list, tuple)):
            self.comments.extend(comment)
        else:
            self.comments.append(comment)
        return self

    def open_block(self) -> 'FbxProperty':
        """Force a brace block even if no children are ever added"""
        if self.children is None:
            self.children = []
        return self

    def find(self, name: str) -> Optional['FbxProperty']:
        """First direct child with the given name"""
        for child in self.children or []:
            if child.name == name:
                return child
        return None

    def find_all(self, name: str) -> List['FbxProperty']:
        return [child for child in self.children or [] if child.name == name]

    def __repr__(self):
        return f"FbxProperty({self.name!r}, values={len(self.values)}, children={len(self.children or [])})"
