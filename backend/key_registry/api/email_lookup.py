# key_registry/api/email_lookup.py

from fastapi import APIRouter, Depends
from pydantic import BaseModel
from sqlalchemy.orm import Session

from key_registry.core.user import get_aggregated_public_key
from key_registry.core.validation import ensure_valid_email
from key_registry.infra.postgres import get_db

router = APIRouter(prefix="/email")


class EmailLookupResponse(BaseModel):
    exists: bool
    aggregated_public_key: str | None = None


@router.get(
    "/{email}",
    response_model=EmailLookupResponse,
    response_model_exclude_none=True,  # unknown emails carry no key field at all
)
def check_email(email: str, db: Session = Depends(get_db)):
    """Tell whether an email is registered and return its aggregated public key"""
    ensure_valid_email(email)

    key = get_aggregated_public_key(db, email)
    if key is None:
        return {"exists": False}

    return {"exists": True, "aggregated_public_key": key}
