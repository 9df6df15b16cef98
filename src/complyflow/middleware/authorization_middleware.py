"""Organisation-scoped access control dependencies for FastAPI endpoints.

For org-scoped endpoints the org_id path parameter is resolved by FastAPI's
dependency injection and compared with the caller's profile organisation.
"""

from dataclasses import dataclass
from typing import Optional

from fastapi import Depends, Path, Request

from complyflow.exception.api_exceptions import OrganizationAccessError
from complyflow.middleware.authentication_middleware import (
    AuthenticatedUser,
    require_user,
)


@dataclass
class OrganizationContext:
    """Request-scoped identity bound to one organisation.

    Attributes:
        user_id: Authenticated user identifier
        org_id: Organisation identifier from the path
        role: Profile role within the organisation (owner, admin, member)
    """

    user_id: str
    org_id: str
    role: Optional[str] = None

    @property
    def is_admin(self) -> bool:
        return self.role in ("owner", "admin")


async def require_org_member(
    request: Request,
    org_id: str = Path(...),
    user: AuthenticatedUser = Depends(require_user),
) -> OrganizationContext:
    """Require the caller's profile to belong to the org in the path.

    Raises:
        AuthenticationError: 401 if not authenticated
        OrganizationAccessError: 403 if the profile belongs elsewhere
    """
    profile_repo = request.app.state.profile_repo
    profile = await profile_repo.get_by_id(user.user_id)
    if not profile or str(profile.organization_id) != str(org_id):
        raise OrganizationAccessError()
    return OrganizationContext(user_id=user.user_id, org_id=org_id, role=profile.role)
