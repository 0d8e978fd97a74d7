"""
Issue Service
Reporting and listing civic issues
"""
import logging
from typing import List, Optional

from beanie import PydanticObjectId
from pymongo.errors import PyMongoError

from civiceye.errors import ServerError, ValidationError
from civiceye.models.citizen import Citizen, CitizenName
from civiceye.models.issue import (
    SUPPORTED_LANGUAGES,
    Issue,
    IssueCreate,
    IssueSummary,
)


logger = logging.getLogger(__name__)


class IssueService:
    """Issue reporting and listing"""

    async def create_issue(self, data: IssueCreate, citizen_id: PydanticObjectId) -> Issue:
        title = (data.title or "").strip()
        location = data.location

        if (
            not title
            or not data.description
            or location is None
            or location.latitude is None
            or location.longitude is None
            or not data.issue_type
        ):
            raise ValidationError("Please fill all the required fields")

        try:
            if await Issue.find_one({"title": title}):
                raise ValidationError("Issue with this title already exists")

            issue = Issue(
                title=title,
                description=data.description,
                issue_type=data.issue_type,
                location=location,
                citizen_id=citizen_id,
                language=data.language,
            )
            await issue.insert()
        except PyMongoError as exc:
            logger.exception("Error creating issue")
            raise ServerError("Internal server error") from exc

        logger.info("Issue %s reported by citizen %s", issue.id, citizen_id)
        return issue

    async def list_issues(
        self, language: Optional[str] = None, citizen_id: Optional[PydanticObjectId] = None
    ) -> List[IssueSummary]:
        """List issues with the caller's hype state; anonymous callers never have hyped."""
        query = {}
        if language in SUPPORTED_LANGUAGES:
            query["language"] = language

        try:
            issues = await Issue.find(query).sort("-createdAt").to_list()
            reporter_ids = list({i.citizen_id for i in issues if i.citizen_id})
            reporters = await Citizen.find(
                {"_id": {"$in": reporter_ids}}
            ).project(CitizenName).to_list() if reporter_ids else []
        except PyMongoError as exc:
            logger.exception("Error fetching issues")
            raise ServerError("Something went wrong") from exc

        names = {r.id: r.full_name for r in reporters}
        return [
            IssueSummary(
                id=issue.id,
                title=issue.title,
                description=issue.description,
                type=issue.issue_type,
                location=issue.location,
                reported_by=names.get(issue.citizen_id, "Anonymous"),
                reported_at=issue.created_at,
                status=issue.status,
                hype_points=issue.hype_points,
                user_has_hyped=citizen_id is not None and citizen_id in issue.hyped_by,
            )
            for issue in issues
        ]


issue_service = IssueService()
