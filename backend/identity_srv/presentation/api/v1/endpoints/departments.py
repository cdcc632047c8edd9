"""Department endpoints."""

from fastapi import APIRouter, Depends, status

from identity_srv.application.schemas import (
    CreateDepartmentRequest,
    DepartmentSchema,
    UpdateDepartmentRequest,
)
from identity_srv.application.services import DepartmentService
from identity_srv.infrastructure.dependencies import get_department_service

router = APIRouter(prefix="/departments", tags=["Departments"])


@router.get("/{department_id}", response_model=DepartmentSchema)
async def get_department(
    department_id: str,
    service: DepartmentService = Depends(get_department_service),
) -> DepartmentSchema:
    return await service.get_department(department_id)


@router.post("", response_model=DepartmentSchema, status_code=status.HTTP_201_CREATED)
async def create_department(
    data: CreateDepartmentRequest,
    service: DepartmentService = Depends(get_department_service),
) -> DepartmentSchema:
    return await service.create_department(data)


@router.put("/{department_id}", response_model=DepartmentSchema)
async def update_department(
    department_id: str,
    data: UpdateDepartmentRequest,
    service: DepartmentService = Depends(get_department_service),
) -> DepartmentSchema:
    return await service.update_department(
        data.model_copy(update={"department_id": department_id})
    )


@router.delete("/{department_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_department(
    department_id: str,
    service: DepartmentService = Depends(get_department_service),
) -> None:
    await service.delete_department(department_id)
