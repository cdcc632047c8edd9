"""Recursive projection of the menu tree.

The outward ``id`` of every node is its semantic identifier; storage UUIDs
are never emitted.
"""

from identity_srv.application.schemas.menu import MenuNodeSchema
from identity_srv.application.converters.value_boxing import box_string
from identity_srv.domain.entities.menu import Menu


class MenuConverter:

    def model_to_wire(self, menu: Menu | None) -> MenuNodeSchema | None:
        if menu is None:
            return None
        return MenuNodeSchema(
            id=menu.semantic_id,
            name=menu.name,
            path=box_string(menu.path),
            icon=box_string(menu.icon),
            component=box_string(menu.component),
            children=self.models_to_wire(menu.children),
        )

    def models_to_wire(self, menus: list[Menu] | None) -> list[MenuNodeSchema] | None:
        """Sibling order is preserved; an empty level yields ``None``."""
        if not menus:
            return None
        return [self.model_to_wire(menu) for menu in menus]
