"""Projection between ``Permission`` and ``PermissionSchema`` (lossless)."""

from identity_srv.application.converters.value_boxing import box_string, unbox_string
from identity_srv.application.schemas.role import PermissionSchema
from identity_srv.domain.entities.role import Permission


class PermissionConverter:

    def model_to_wire(self, permission: Permission | None) -> PermissionSchema | None:
        if permission is None:
            return None
        return PermissionSchema(
            resource=permission.resource,
            action=permission.action,
            description=box_string(permission.description),
        )

    def wire_to_model(self, schema: PermissionSchema | None) -> Permission | None:
        if schema is None:
            return None
        return Permission(
            resource=unbox_string(schema.resource),
            action=unbox_string(schema.action),
            description=unbox_string(schema.description),
        )

    def models_to_wire(self, permissions: list[Permission] | None) -> list[PermissionSchema]:
        """Empty or absent input yields an empty list."""
        return [self.model_to_wire(p) for p in permissions or []]

    def wires_to_models(self, schemas: list[PermissionSchema] | None) -> list[Permission]:
        return [self.wire_to_model(s) for s in schemas or []]
