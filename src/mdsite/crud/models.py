"""Database table definitions for the persisted build result"""

from datetime import datetime
from typing import Any, Dict, List, Optional
from uuid import UUID, uuid4

from sqlalchemy import JSON, Column, DateTime, String, Text
from sqlmodel import Field, SQLModel


class DocumentRecord(SQLModel, table=True):
    """A built document as served to the rendering layer"""
    __tablename__ = "documents"
    id: UUID = Field(default_factory=uuid4, primary_key=True)
    path: str = Field(..., sa_column=Column(Text, nullable=False, unique=True))
    slug: str = Field(..., index=True, unique=True, nullable=False)
    type: str = Field(..., index=True, nullable=False, description="Document type name, e.g. Post")
    url: str = Field(..., sa_column=Column(Text, nullable=False))
    hash: str = Field(..., sa_column=Column(String(64), nullable=False))
    fields: Optional[Dict[str, Any]] = Field(default=None, sa_column=Column(JSON, nullable=True))
    headings: Optional[List[Dict[str, Any]]] = Field(default=None, sa_column=Column(JSON, nullable=True))
    body_html: str = Field(..., sa_column=Column(Text, nullable=False))
    reading_time: int = Field(default=1, nullable=False)
    created_at: datetime = Field(default_factory=datetime.now, sa_column=Column(DateTime(timezone=False), nullable=False))
    updated_at: datetime = Field(default_factory=datetime.now, sa_column=Column(DateTime(timezone=False), nullable=False))
    committed_at: Optional[datetime] = Field(default=None, sa_column=Column(DateTime(timezone=False), nullable=True))
