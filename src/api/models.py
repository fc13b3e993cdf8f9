"""Pydantic models for API request/response."""

from datetime import date, datetime
from typing import Optional, Literal
from pydantic import BaseModel, Field


# Authentication models

class UserResponse(BaseModel):
    """Redacted user returned to clients (no password hash, no provider id)."""
    id: str = Field(..., description="User ID")
    email: str
    first_name: str
    last_name: str
    display_name: Optional[str] = None
    profile_picture: Optional[str] = Field(None, description="URL to the user's profile picture")
    provider: Literal["google", "local"]
    is_active: bool = Field(True, description="Whether the user account is active")
    last_login: Optional[datetime] = None
    created_at: datetime
    updated_at: datetime


class AuthStatusResponse(BaseModel):
    """Response model for session status."""
    authenticated: bool
    user: Optional[UserResponse] = None


class LoginSuccessResponse(BaseModel):
    success: bool = True
    message: str
    user: UserResponse


class DashboardResponse(BaseModel):
    success: bool = True
    message: str
    user: UserResponse
    stats: dict


class MessageResponse(BaseModel):
    success: bool
    message: str


# Catalog models

class BookRequest(BaseModel):
    """Request model for creating or replacing a book.

    Fields are optional here so that missing values surface as domain
    validation errors, all at once.
    """
    title: Optional[str] = None
    author: Optional[str] = Field(None, description="Author full name or email")
    isbn: Optional[str] = Field(None, description="ISBN-10 or ISBN-13")
    published_date: Optional[date] = None
    genre: Optional[str] = None
    pages: Optional[int] = None
    publisher: Optional[str] = None
    language: Optional[str] = None
    description: Optional[str] = None
    available_copies: int = 1
    total_copies: int = 1


class BookResponse(BaseModel):
    id: str = Field(..., description="Book ID")
    title: str
    author: str
    isbn: str
    published_date: Optional[date] = None
    genre: str
    pages: Optional[int] = None
    publisher: str
    language: Optional[str] = None
    description: Optional[str] = None
    available_copies: int
    total_copies: int
    created_at: datetime
    updated_at: datetime


class AuthorRequest(BaseModel):
    """Request model for creating or replacing an author."""
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    email: Optional[str] = None
    birth_date: Optional[date] = None
    nationality: Optional[str] = None
    biography: Optional[str] = None
    website: Optional[str] = None


class AuthorResponse(BaseModel):
    id: str = Field(..., description="Author ID")
    first_name: str
    last_name: Optional[str] = None
    email: str
    birth_date: Optional[date] = None
    nationality: str
    biography: Optional[str] = None
    website: Optional[str] = None
    created_at: datetime
    updated_at: datetime


class BookListResponse(BaseModel):
    success: bool = True
    count: int
    data: list[BookResponse]


class BookEnvelope(BaseModel):
    success: bool = True
    message: Optional[str] = None
    data: BookResponse


class AuthorListResponse(BaseModel):
    success: bool = True
    count: int
    data: list[AuthorResponse]


class AuthorEnvelope(BaseModel):
    success: bool = True
    message: Optional[str] = None
    data: AuthorResponse
