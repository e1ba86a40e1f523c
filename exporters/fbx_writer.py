#!/usr/bin/env python3
"""
FBX Writer Module
Walks a property tree and emits FBX ASCII lines into a sink.

The sink is any callable taking one line (without newline). Trees are
validated in full before the first line is emitted, so a malformed tree
never produces partial output.
"""

from core.errors import UnsupportedOperationError
from core.fbx_values import PropertyValue, PROPERTY_SEPARATOR

TAG_COMMENT = "; "
INDENT = "\t"


def validate_property(prop, path=""):
    """Check a tree can be written

    Raises:
        UnsupportedOperationError: On a subtree stored as a value, or a leaf
                                   node with nothing to write
    """
    path = f"{path}/{prop.name}" if path else prop.name

    for value in prop.values:
        if isinstance(value, PropertyValue):
            raise UnsupportedOperationError(
                f"{path}: property '{value.property.name}' was added as a value; export it as a child"
            )

    if not prop.values and prop.children is None:
        raise UnsupportedOperationError(f"{path}: node has no values and no children")

    for child in prop.children or []:
        validate_property(child, path)


def format_property_line(prop, indent=0):
    """`<tabs>Name: v1, v2` for a single node"""
    values = PROPERTY_SEPARATOR.join(value.to_text() for value in prop.values)
    return f"{INDENT * indent}{prop.name}: {values}"


def _emit(write_line, prop, indent):
    indent_str = INDENT * indent
    for comment in prop.comments:
        write_line(indent_str + TAG_COMMENT + comment)

    write_line(format_property_line(prop, indent))

    if prop.children is not None:
        write_line(indent_str + "{")
        for child in prop.children:
            _emit(write_line, child, indent + 1)
        write_line(indent_str + "}")


def write_property(write_line, prop, indent=0):
    """Validate then write one property subtree"""
    validate_property(prop)
    _emit(write_line, prop, indent)


def write_document(write_line, roots, comments=None):
    """Write a whole document

    Layout: the attribution comment block, a blank line, then every root
    node followed by a blank line.

    Args:
        write_line: Sink called once per line
        roots: Top-level FbxProperty nodes in output order
        comments: Attribution lines for the top of the file
    """
    for root in roots:
        validate_property(root)

    for comment in comments or []:
        write_line(TAG_COMMENT + comment)
    write_line("")

    for root in roots:
        _emit(write_line, root, 0)
        write_line("")


def render_document(roots, comments=None):
    """Buffer a document and return its lines"""
    lines = []
    write_document(lines.append, roots, comments)
    return lines
