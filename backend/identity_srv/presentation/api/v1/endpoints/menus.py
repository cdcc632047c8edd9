"""Navigation menu endpoints."""

from fastapi import APIRouter, Depends, status

from identity_srv.application.schemas import (
    ConfigureRoleMenusRequest,
    MenuTreeResponse,
    RoleMenuTreeResponse,
    UploadMenuRequest,
    UploadMenuResponse,
    UserMenuTreeResponse,
)
from identity_srv.application.services import MenuService
from identity_srv.infrastructure.dependencies import get_menu_service

router = APIRouter(prefix="/menus", tags=["Menus"])


@router.post("", response_model=UploadMenuResponse, status_code=status.HTTP_201_CREATED)
async def upload_menu(
    data: UploadMenuRequest,
    service: MenuService = Depends(get_menu_service),
) -> UploadMenuResponse:
    """Upload a YAML menu definition as a new version."""
    return await service.upload_menu(data)


@router.get("", response_model=MenuTreeResponse)
async def get_menu_tree(
    service: MenuService = Depends(get_menu_service),
) -> MenuTreeResponse:
    return await service.get_menu_tree()


@router.put("/roles/{role_id}", response_model=RoleMenuTreeResponse)
async def configure_role_menus(
    role_id: str,
    data: ConfigureRoleMenusRequest,
    service: MenuService = Depends(get_menu_service),
) -> RoleMenuTreeResponse:
    return await service.configure_role_menus(data.model_copy(update={"role_id": role_id}))


@router.get("/roles/{role_id}", response_model=RoleMenuTreeResponse)
async def get_role_menu_tree(
    role_id: str,
    service: MenuService = Depends(get_menu_service),
) -> RoleMenuTreeResponse:
    return await service.get_role_menu_tree(role_id)


@router.get("/users/{user_id}", response_model=UserMenuTreeResponse)
async def get_user_menu_tree(
    user_id: str,
    service: MenuService = Depends(get_menu_service),
) -> UserMenuTreeResponse:
    return await service.get_user_menu_tree(user_id)
