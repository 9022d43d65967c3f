from datetime import datetime
from typing import Literal

from academicflow.schemas.common import APIModel

Role = Literal["student", "faculty"]


class UserResponse(APIModel):
    id: str
    email: str | None = None
    first_name: str | None = None
    last_name: str | None = None
    profile_image_url: str | None = None
    role: Role | None = None
    department: str | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None


class SelectRoleRequest(APIModel):
    role: str | None = None
