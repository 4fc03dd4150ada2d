"""Project and membership schemas."""

from core.schemas.project.member_request import (
    MemberAddRequest,
    MemberRoleUpdateRequest,
)
from core.schemas.project.project_detail import ProjectDetail, ProjectListResponse
from core.schemas.project.project_list_query import ProjectListQuery
from core.schemas.project.project_member_detail import ProjectMemberDetail
from core.schemas.project.project_request import (
    ProjectCreateRequest,
    ProjectUpdateRequest,
)

__all__ = [
    "MemberAddRequest",
    "MemberRoleUpdateRequest",
    "ProjectCreateRequest",
    "ProjectDetail",
    "ProjectListQuery",
    "ProjectListResponse",
    "ProjectMemberDetail",
    "ProjectUpdateRequest",
]
