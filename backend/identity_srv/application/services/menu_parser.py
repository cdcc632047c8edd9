"""Menu YAML parsing and tree helpers.

A menu document looks like::

    menu:
      - name: Dashboard
        id: dashboard
        path: /dashboard
        icon: home
        component: DashboardView
        children:
          - name: Reports
            id: dashboard.reports
            path: /dashboard/reports

``id`` is the semantic identifier and must be unique across the document.
"""

import dataclasses
from uuid import UUID, uuid4

import yaml

from identity_srv.domain.entities import Menu, now_millis
from identity_srv.domain.exceptions import ErrorCode, InvalidArgumentError


def _invalid(message: str) -> InvalidArgumentError:
    return InvalidArgumentError(message, ErrorCode.MENU_INVALID_CONFIG)


def parse_menu_yaml(content: str) -> list[Menu]:
    """Parse a menu document into a tree of unsaved ``Menu`` nodes."""
    try:
        document = yaml.safe_load(content)
    except yaml.YAMLError as exc:
        raise _invalid(f"Menu YAML could not be parsed: {exc}") from exc

    if not isinstance(document, dict) or "menu" not in document:
        raise _invalid("Menu YAML must have a top-level 'menu' key")
    nodes = document["menu"]
    if not isinstance(nodes, list) or not nodes:
        raise _invalid("'menu' must be a non-empty list")

    seen: set[str] = set()
    return [_parse_node(node, f"menu[{i}]", seen) for i, node in enumerate(nodes)]


def _parse_node(raw: object, location: str, seen: set[str]) -> Menu:
    if not isinstance(raw, dict):
        raise _invalid(f"{location} must be a mapping")

    values: dict[str, str] = {}
    for key in ("name", "id", "path", "icon", "component"):
        value = raw.get(key)
        values[key] = "" if value is None else str(value).strip()
    for key in ("name", "id", "path"):
        if not values[key]:
            raise _invalid(f"{location}.{key} is required")

    semantic_id = values["id"]
    if semantic_id in seen:
        raise _invalid(f"Duplicate menu id '{semantic_id}' at {location}")
    seen.add(semantic_id)

    raw_children = raw.get("children") or []
    if not isinstance(raw_children, list):
        raise _invalid(f"{location}.children must be a list")

    return Menu(
        semantic_id=semantic_id,
        name=values["name"],
        path=values["path"],
        icon=values["icon"],
        component=values["component"],
        children=[
            _parse_node(child, f"{location}.children[{i}]", seen)
            for i, child in enumerate(raw_children)
        ],
    )


def new_menu_version() -> str:
    return f"v{now_millis()}"


def flatten_menu_tree(roots: list[Menu], version: str) -> list[Menu]:
    """Assign storage ids, parent links and sibling order; return all nodes.

    Nodes are returned parents-first so they can be inserted in order.
    """
    flat: list[Menu] = []

    def visit(nodes: list[Menu], parent_id: UUID | None) -> None:
        for index, node in enumerate(nodes):
            node.id = uuid4()
            node.version = version
            node.parent_id = parent_id
            node.sort = index
            flat.append(node)
            visit(node.children, node.id)

    visit(roots, None)
    return flat


def build_menu_tree(flat: list[Menu]) -> list[Menu]:
    """Rebuild the tree from a flat list; siblings are ordered by ``sort``."""
    by_parent: dict[UUID | None, list[Menu]] = {}
    for node in flat:
        node.children = []
        by_parent.setdefault(node.parent_id, []).append(node)
    for siblings in by_parent.values():
        siblings.sort(key=lambda m: m.sort)
    for node in flat:
        node.children = by_parent.get(node.id, [])
    return by_parent.get(None, [])


def filter_menu_tree(roots: list[Menu], granted: set[str]) -> list[Menu]:
    """Keep granted nodes and every ancestor of a granted node.

    A granted node keeps its whole subtree. The input tree is not modified.
    """
    result: list[Menu] = []
    for node in roots:
        if node.semantic_id in granted:
            result.append(node)
            continue
        children = filter_menu_tree(node.children, granted)
        if children:
            result.append(dataclasses.replace(node, children=children))
    return result
