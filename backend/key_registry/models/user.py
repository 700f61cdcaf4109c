# key_registry/models/user.py - Matches the existing users table

from sqlalchemy import Boolean, Column, FetchedValue, String, UniqueConstraint, Uuid, true

from key_registry.models.base import Base

EMAIL_UNIQUE_CONSTRAINT = "users_email_key"


class User(Base):
    __tablename__ = "users"
    __table_args__ = (UniqueConstraint("email", name=EMAIL_UNIQUE_CONSTRAINT),)
    # Load store-assigned values (id, active) right after the INSERT
    __mapper_args__ = {"eager_defaults": True}

    # The table generates id; the INSERT leaves it out and reads it back
    id = Column(Uuid, primary_key=True, server_default=FetchedValue())
    email = Column(String, nullable=False)
    active = Column(Boolean, nullable=False, server_default=true())
    private_key = Column(String, nullable=False)
    aggregated_public_key = Column(String, nullable=False)
