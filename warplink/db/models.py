"""
Database Models for WarpLink

This module defines the SQLModel schema for the single persisted entity:
- Link: maps a short code to the original long URL

Design Decisions:
- Unique constraint on short_code: uniqueness is enforced by the store, so two
  creators racing on the same candidate code cannot both succeed
- created_at is assigned by the database, not the application clock
- Rows are never updated or deleted
"""

from datetime import datetime
from typing import Optional

from sqlalchemy import BigInteger, Column, DateTime, Integer, String, Text, UniqueConstraint, func
from sqlmodel import Field, SQLModel

SHORT_CODE_MAX_LENGTH = 7


class Link(SQLModel, table=True):
    """
    Mapping from a short code to a long URL.

    Fields:
    - id: Auto-incrementing surrogate key, assigned on insert, never reused
    - short_code: Public lookup key, case-sensitive, unique
    - long_url: Destination URL, validated before insert
    - created_at: Insert timestamp from the database server
    """
    __tablename__ = "warp_link"
    __table_args__ = (
        UniqueConstraint("short_code", name="uq_warp_link_short_code"),
        {"sqlite_autoincrement": True},
    )

    id: Optional[int] = Field(
        default=None,
        sa_column=Column(
            BigInteger().with_variant(Integer(), "sqlite"),
            primary_key=True,
            autoincrement=True,
        ),
    )
    short_code: str = Field(
        sa_column=Column(String(SHORT_CODE_MAX_LENGTH), nullable=False),
        max_length=SHORT_CODE_MAX_LENGTH
    )
    long_url: str = Field(sa_column=Column(Text, nullable=False))
    created_at: Optional[datetime] = Field(
        default=None,
        sa_column=Column(DateTime(timezone=True), nullable=False, server_default=func.now())
    )
