"""V1 API router — aggregates all v1 endpoint routers."""

from fastapi import APIRouter

from identity_srv.presentation.api.v1.endpoints.health import router as health_router
from identity_srv.presentation.api.v1.endpoints.auth import router as auth_router
from identity_srv.presentation.api.v1.endpoints.users import router as users_router
from identity_srv.presentation.api.v1.endpoints.organizations import router as organizations_router
from identity_srv.presentation.api.v1.endpoints.departments import router as departments_router
from identity_srv.presentation.api.v1.endpoints.logos import router as logos_router
from identity_srv.presentation.api.v1.endpoints.memberships import router as memberships_router
from identity_srv.presentation.api.v1.endpoints.roles import router as roles_router
from identity_srv.presentation.api.v1.endpoints.role_assignments import (
    router as role_assignments_router,
)
from identity_srv.presentation.api.v1.endpoints.menus import router as menus_router

router = APIRouter(prefix="/v1")
router.include_router(health_router)
router.include_router(auth_router)
router.include_router(users_router)
router.include_router(organizations_router)
router.include_router(departments_router)
router.include_router(logos_router)
router.include_router(memberships_router)
router.include_router(roles_router)
router.include_router(role_assignments_router)
router.include_router(menus_router)
