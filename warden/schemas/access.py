"""Access check request and response schemas. Neither is persisted."""

from datetime import datetime
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field

from warden.core.datetime_utils import utc_now


class AccessRequest(BaseModel):
    """A single ``(user, resource, action, org?)`` access question.

    Required fields default to empty so that the access control service,
    not schema validation, reports them as invalid input.
    """

    user_id: str = ""
    resource: str = ""
    action: str = ""
    org_id: Optional[str] = None
    context: Dict[str, Any] = Field(default_factory=dict)
    timestamp: datetime = Field(default_factory=utc_now)


class AccessResponse(BaseModel):
    """Outcome of a detailed access check."""

    allowed: bool = False
    explanation: str
    matched_rule: Optional[str] = None
    user_roles: List[str] = Field(default_factory=list)
    timestamp: datetime = Field(default_factory=utc_now)
