"""
Identity and Admin Access

Authentication happens upstream in the identity provider; requests arrive
with the verified user id and e-mail in headers. Admin access is a flat
allow-list check on the e-mail, configured through ADMIN_EMAILS.
"""

from dataclasses import dataclass
from datetime import datetime
from typing import Iterable, List, Optional, Tuple

from fastapi import Depends, Header
from pydantic import BaseModel

from autobiography.errors import AuthenticationRequired, AuthorizationError
from autobiography.schemas import AutobiographyData
from autobiography.settings import settings


@dataclass(frozen=True)
class Identity:
    user_id: str
    email: Optional[str] = None


def get_optional_identity(
    user_id: Optional[str] = Header(None, alias="user-id", description="Identity provider UID"),
    user_email: Optional[str] = Header(None, alias="user-email", description="Signed-in e-mail")
) -> Optional[Identity]:
    if not user_id:
        return None
    return Identity(user_id=user_id, email=user_email or None)


def get_current_identity(identity: Optional[Identity] = Depends(get_optional_identity)) -> Identity:
    if identity is None:
        raise AuthenticationRequired("Sign in to continue")
    return identity


def is_admin(identity: Optional[Identity], allow_list: Iterable[str]) -> bool:
    if identity is None or not identity.email:
        return False
    email = identity.email.strip().lower()
    return any(email == allowed.strip().lower() for allowed in allow_list)


def require_admin(identity: Identity = Depends(get_current_identity)) -> Identity:
    if not is_admin(identity, settings.ADMIN_EMAILS):
        raise AuthorizationError(
            "This page is restricted. Contact the account owner if you believe this is an error."
        )
    return identity


class AdminRecordRow(BaseModel):
    user_id: str
    full_name: str
    updated_at: Optional[datetime]
    story_status: str


def summarize_records(rows: Iterable[Tuple[str, AutobiographyData]]) -> List[AdminRecordRow]:
    """Operational overview rows; never exposes the story text itself."""
    return [
        AdminRecordRow(
            user_id=user_id,
            full_name=data.personal_info.full_name or "Unknown",
            updated_at=data.updated_at,
            story_status="Draft generated" if data.has_story() else "Awaiting AI draft",
        )
        for user_id, data in rows
    ]
