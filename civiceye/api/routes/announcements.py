"""
Announcement Routes
Public listing of announcements and admin management endpoints
"""
from fastapi import APIRouter, Depends, Query, status
from typing import Optional

from civiceye.config import settings
from civiceye.models.admin import Admin
from civiceye.models.announcement import (
    AnnouncementCreate,
    AnnouncementListResponse,
    AnnouncementMutationResponse,
    AnnouncementResponse,
    AnnouncementStatsResponse,
    AnnouncementUpdate,
    MessageResponse,
)
from civiceye.api.routes.auth import require_admin
from civiceye.services.announcement_query import AnnouncementQuery
from civiceye.services.announcements import announcement_service

router = APIRouter()


@router.get("", response_model=AnnouncementListResponse)
async def get_announcements(
    pincode: Optional[str] = None,
    category: Optional[str] = None,
    priority: Optional[str] = None,
    search: Optional[str] = None,
    page: Optional[str] = None,
    limit: Optional[str] = None,
    sort_by: Optional[str] = Query(None, alias="sortBy"),
    sort_order: Optional[str] = Query(None, alias="sortOrder"),
):
    """Get live announcements with optional filtering and pagination"""
    query = AnnouncementQuery.from_params(
        pincode=pincode,
        category=category,
        priority=priority,
        search=search,
        page=page,
        limit=limit,
        sort_by=sort_by,
        sort_order=sort_order,
        default_limit=settings.ANNOUNCEMENTS_PAGE_SIZE,
        max_limit=settings.ANNOUNCEMENTS_MAX_PAGE_SIZE,
    )
    return await announcement_service.list_announcements(query)


@router.get("/stats/summary", response_model=AnnouncementStatsResponse)
async def get_announcement_stats(current_admin: Admin = Depends(require_admin)):
    """Get announcement statistics (Admin only)"""
    stats = await announcement_service.get_stats()
    return {"success": True, "data": stats}


@router.get("/{announcement_id}", response_model=AnnouncementResponse)
async def get_announcement(announcement_id: str):
    """Get a single announcement, including inactive or expired ones"""
    announcement = await announcement_service.get_announcement(announcement_id)
    return {"success": True, "data": announcement}


@router.post("", response_model=AnnouncementMutationResponse, status_code=status.HTTP_201_CREATED)
async def create_announcement(
    data: AnnouncementCreate,
    current_admin: Admin = Depends(require_admin)
):
    """Create a new announcement (Admin only)"""
    announcement = await announcement_service.create_announcement(data, current_admin.id)
    return {
        "success": True,
        "message": "Announcement created successfully",
        "data": announcement,
    }


@router.put("/{announcement_id}", response_model=AnnouncementMutationResponse)
async def update_announcement(
    announcement_id: str,
    data: AnnouncementUpdate,
    current_admin: Admin = Depends(require_admin)
):
    """Update an announcement (Admin only)"""
    announcement = await announcement_service.update_announcement(
        announcement_id, data, current_admin.id
    )
    return {
        "success": True,
        "message": "Announcement updated successfully",
        "data": announcement,
    }


@router.delete("/{announcement_id}", response_model=MessageResponse)
async def delete_announcement(
    announcement_id: str,
    current_admin: Admin = Depends(require_admin)
):
    """Deactivate an announcement (Admin only)"""
    await announcement_service.delete_announcement(announcement_id, current_admin.id)
    return {"success": True, "message": "Announcement deleted successfully"}
