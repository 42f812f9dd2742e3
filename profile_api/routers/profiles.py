from __future__ import annotations

import logging

from fastapi import APIRouter, Depends

from profile_api.routers.dependencies import current_profile_id, get_profile_service
from profile_api.schemas import (
    ErrorResponse,
    GetProfileResponse,
    LoginRequest,
    LoginResponse,
    RegisterProfileRequest,
    RegisterProfileResponse,
    UpdateProfileRequest,
    UpdateProfileResponse,
)
from profile_api.services.profile_service import ProfileService

router = APIRouter(
    tags=["profiles"],
    responses={400: {"model": ErrorResponse}, 500: {"model": ErrorResponse}},
)
logger = logging.getLogger(__name__)


@router.post("/register", response_model=RegisterProfileResponse)
def register_profile(payload: RegisterProfileRequest, service: ProfileService = Depends(get_profile_service)):
    result = service.register(payload.full_name, payload.phone_number, payload.password)
    return RegisterProfileResponse(profile_id=result.profile_id)


@router.post("/login", response_model=LoginResponse)
def login(payload: LoginRequest, service: ProfileService = Depends(get_profile_service)):
    result = service.login(payload.phone_number, payload.password)
    return LoginResponse(token=result.token)


@router.get("/profile", response_model=GetProfileResponse)
def get_profile(
    profile_id: str = Depends(current_profile_id),
    service: ProfileService = Depends(get_profile_service),
):
    view = service.get_profile(profile_id)
    return GetProfileResponse(full_name=view.full_name, phone_number=view.phone_number)


@router.put("/profile", response_model=UpdateProfileResponse)
def update_profile(
    payload: UpdateProfileRequest,
    profile_id: str = Depends(current_profile_id),
    service: ProfileService = Depends(get_profile_service),
):
    service.update_profile(profile_id, payload.full_name, payload.phone_number)
    logger.info("profile %s updated", profile_id)
    return UpdateProfileResponse(message="Success update profile")
