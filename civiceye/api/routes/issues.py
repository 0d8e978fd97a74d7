"""
Issue Routes
Issue reporting, listing and hype endpoints.

Responses here are bare objects without the `success` wrapper used by
the announcement endpoints, errors included.
"""
from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse
from typing import Optional

from civiceye.errors import CivicEyeError, Unauthorized
from civiceye.models.citizen import Citizen
from civiceye.models.issue import HypeResult, IssueCreate, IssueCreatedResponse, IssueListResponse
from civiceye.api.routes.auth import get_optional_citizen
from civiceye.services.hype import hype_service
from civiceye.services.issues import issue_service

router = APIRouter()


def error_response(exc: CivicEyeError) -> JSONResponse:
    return JSONResponse(status_code=exc.status_code, content={"message": exc.message})


@router.get("", response_model=IssueListResponse)
async def get_issues(
    language: Optional[str] = None,
    current_citizen: Optional[Citizen] = Depends(get_optional_citizen)
):
    """List issues with hype counts and whether the caller has hyped each one"""
    try:
        issues = await issue_service.list_issues(
            language=language,
            citizen_id=current_citizen.id if current_citizen else None,
        )
    except CivicEyeError as exc:
        return error_response(exc)
    return {"issues": issues}


@router.post("", response_model=IssueCreatedResponse)
async def create_issue(
    data: IssueCreate,
    current_citizen: Optional[Citizen] = Depends(get_optional_citizen)
):
    """Report a new issue (Citizen only)"""
    try:
        if current_citizen is None:
            raise Unauthorized("Unauthorized")
        issue = await issue_service.create_issue(data, current_citizen.id)
    except CivicEyeError as exc:
        return error_response(exc)
    return {"message": "Issue created", "issue": issue}


@router.post("/{issue_id}/hype", response_model=HypeResult)
async def hype_issue(
    issue_id: str,
    current_citizen: Optional[Citizen] = Depends(get_optional_citizen)
):
    """Hype an issue once per citizen; repeats return the current count"""
    try:
        return await hype_service.hype_issue(
            issue_id, current_citizen.id if current_citizen else None
        )
    except CivicEyeError as exc:
        return error_response(exc)
