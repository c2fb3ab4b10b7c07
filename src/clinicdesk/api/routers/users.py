"""User management endpoints (admin only)."""

from typing import List

from fastapi import APIRouter, Depends, Request, status

from ...application.access.role_router import View
from ...application.dto.user_dto import ChangePasswordRequest as ChangePasswordDTO
from ...application.dto.user_dto import CreateUserRequest as CreateUserDTO
from ...application.use_cases.manage_users import (
    ChangePasswordUseCase,
    CreateUserUseCase,
    ListUsersUseCase,
)
from ..deps import GatewayDep, SettingsDep, require_view
from ..schemas.common import ApiResponse, ErrorResponse
from ..schemas.users import ChangePasswordRequest, CreateUserRequest, UserOut
from ..utils.responses import ok

router = APIRouter(
    prefix="/users",
    tags=["User Management"],
    dependencies=[Depends(require_view(View.USER_MANAGEMENT))],
)


@router.get("", response_model=ApiResponse[List[UserOut]])
async def list_users(request: Request, gateway: GatewayDep):
    users = await ListUsersUseCase(gateway).execute()
    return ok(request, data=[UserOut.from_entity(user) for user in users], message="OK")


@router.post(
    "",
    response_model=ApiResponse[UserOut],
    status_code=status.HTTP_201_CREATED,
    responses={
        409: {"model": ErrorResponse, "description": "Duplicate user ID or second receptionist"},
        422: {"model": ErrorResponse, "description": "Form validation failed"},
    },
)
async def create_user(request: Request, body: CreateUserRequest, gateway: GatewayDep, settings: SettingsDep):
    use_case = CreateUserUseCase(gateway, settings.security.password_hash_iterations)
    result = await use_case.execute(CreateUserDTO(**body.model_dump()))
    return ok(request, data=UserOut.from_entity(result.user), message=result.message)


@router.put(
    "/{user_id}/password",
    response_model=ApiResponse[dict],
    responses={404: {"model": ErrorResponse, "description": "User not found"}},
)
async def change_password(
    request: Request,
    user_id: str,
    body: ChangePasswordRequest,
    gateway: GatewayDep,
    settings: SettingsDep,
):
    use_case = ChangePasswordUseCase(gateway, settings.security.password_hash_iterations)
    result = await use_case.execute(ChangePasswordDTO(user_id=user_id, password=body.password))
    return ok(request, data={"user_id": result.user_id}, message=result.message)
