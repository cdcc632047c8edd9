"""Wire records for navigation menus."""

from pydantic import BaseModel, Field


class MenuNodeSchema(BaseModel):
    """A menu node; ``id`` is the semantic identifier, never a storage UUID."""

    id: str | None = None
    name: str | None = None
    path: str | None = None
    icon: str | None = None
    component: str | None = None
    children: list["MenuNodeSchema"] | None = None


class UploadMenuRequest(BaseModel):
    yaml_content: str | None = None


class UploadMenuResponse(BaseModel):
    version: str
    node_count: int


class MenuTreeResponse(BaseModel):
    menu_tree: list[MenuNodeSchema] = Field(default_factory=list)


class ConfigureRoleMenusRequest(BaseModel):
    role_id: str | None = None
    menu_ids: list[str] = Field(default_factory=list)


class RoleMenuTreeResponse(BaseModel):
    role_id: str
    menu_tree: list[MenuNodeSchema] = Field(default_factory=list)


class UserMenuTreeResponse(BaseModel):
    user_id: str
    role_ids: list[str] = Field(default_factory=list)
    menu_tree: list[MenuNodeSchema] = Field(default_factory=list)


MenuNodeSchema.model_rebuild()
