"""Reads raw values out of matched nodes."""

from webgrab.core.document import Node


def extract_value(node: Node, attribute: str | None = None) -> str:
    """Return the node text, or the named attribute when one is given.

    A missing attribute yields an empty string. No whitespace is trimmed here.

    Args:
        node: Matched node
        attribute: Attribute name to read instead of the text

    Returns:
        The raw string value

    """
    if not attribute:
        return node.text()
    value = node.attribute(attribute)
    return value if value is not None else ''


def extract_values(nodes: list[Node], attribute: str | None = None) -> list[str]:
    """Extract the raw value of every node, keeping document order."""
    return [extract_value(node, attribute) for node in nodes]
