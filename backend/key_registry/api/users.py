# key_registry/api/users.py

import logging

from fastapi import APIRouter, Depends
from pydantic import BaseModel, field_validator
from sqlalchemy.orm import Session

from key_registry.core.user import register_user
from key_registry.core.validation import is_valid_email
from key_registry.infra.postgres import get_db

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/users")


class CreateUserSchema(BaseModel):
    email: str
    private_key: str
    aggregated_public_key: str

    @field_validator("email")
    @classmethod
    def email_format(cls, v: str) -> str:
        # Validate only; the stored email is exactly what the caller sent
        if not is_valid_email(v):
            raise ValueError("invalid email address")
        return v


class CreateUserResponse(BaseModel):
    success: bool


@router.post("", response_model=CreateUserResponse)
def create_user_endpoint(payload: CreateUserSchema, db: Session = Depends(get_db)):
    logger.info(f"Registering user: {payload.email}")

    active = register_user(
        db,
        payload.email,
        payload.private_key,
        payload.aggregated_public_key,
    )
    logger.info(f"User {payload.email} registered")

    return {"success": active}
