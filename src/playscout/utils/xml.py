"""Decoding KOPIS XML responses into plain dict/list trees."""

from typing import Any

from bs4 import BeautifulSoup, Tag


def decode_xml(text: str | bytes) -> dict[str, Any]:
    """
    Decode an XML document into a nested dict tree.

    Elements with child elements become dicts keyed by child name; a child
    name that repeats becomes a list; leaf elements become stripped text.

    Example:
        >>> decode_xml("<dbs><db><id>1</id></db><db><id>2</id></db></dbs>")
        {'dbs': {'db': [{'id': '1'}, {'id': '2'}]}}

    Args:
        text: Raw XML body, as text or bytes

    Returns:
        ``{root_name: subtree}``

    Raises:
        ValueError: If the document has no root element
    """
    soup = BeautifulSoup(text, "xml")
    root = soup.find()
    if root is None:
        raise ValueError("response contains no XML element")
    return {root.name: _element_to_tree(root)}


def _element_to_tree(element: Tag) -> Any:
    children = element.find_all(recursive=False)
    if not children:
        return element.get_text(strip=True)

    tree: dict[str, Any] = {}
    for child in children:
        value = _element_to_tree(child)
        if child.name not in tree:
            tree[child.name] = value
        elif isinstance(tree[child.name], list):
            tree[child.name].append(value)
        else:
            tree[child.name] = [tree[child.name], value]
    return tree


def as_list(value: Any) -> list:
    """Normalize a decoded value that may be absent, single, or repeated."""
    if value is None or value == "":
        return []
    if isinstance(value, list):
        return value
    return [value]


def find_entries(tree: dict[str, Any], root: str, item: str) -> list[dict[str, Any]]:
    """
    Return the ``item`` records under ``root``, e.g. ``<dbs><db/>...</dbs>``.

    An empty or missing root yields an empty list.
    """
    node = tree.get(root)
    if not isinstance(node, dict):
        return []
    return [entry for entry in as_list(node.get(item)) if isinstance(entry, dict)]
