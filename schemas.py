"""
Schemas for the LegalConnect API

Stored entities and request payloads. Field names are snake_case in Python
and camelCase on the wire (the alias); dump with `by_alias=True`.
- Topic -> "topic" collection (replies stored flat, see reply_tree.py)
- Resource -> "resource" collection
"""

from datetime import datetime, timezone
from typing import List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, PrivateAttr

from reply_tree import ReplyTree

DEFAULT_AVATAR = "/lawyer.png"


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class WireModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True)


# ---------- Forum ----------

class Author(WireModel):
    name: str = Field(..., description="Display name at the time of posting")
    profile_image: str = Field(DEFAULT_AVATAR, alias="profileImage")


class Reply(WireModel):
    id: str
    parent_id: Optional[str] = Field(None, alias="parentId", description="None for top-level replies")
    content: str
    author: Author
    anonymous: bool = False
    vote_score: int = Field(0, alias="voteScore")
    created_at: datetime = Field(default_factory=utcnow, alias="createdAt")


class Topic(WireModel):
    id: str
    title: str
    category: str
    content: str
    author: Author
    anonymous: bool = False
    views: int = Field(0, ge=0)
    vote_score: int = Field(0, alias="voteScore")
    created_at: datetime = Field(default_factory=utcnow, alias="createdAt")

    _replies: ReplyTree = PrivateAttr(default_factory=ReplyTree)

    @property
    def replies(self) -> ReplyTree:
        return self._replies

    def with_replies(self, tree: ReplyTree) -> "Topic":
        self._replies = tree
        return self


class TopicCreate(BaseModel):
    model_config = ConfigDict(str_strip_whitespace=True)

    title: str = Field(..., min_length=1)
    category: str = Field(..., min_length=1)
    content: str = Field(..., min_length=1)
    anonymous: bool = False


class ReplyCreate(WireModel):
    model_config = ConfigDict(populate_by_name=True, str_strip_whitespace=True)

    content: str = Field(..., min_length=1)
    parent_id: Optional[str] = Field(None, alias="parentId")
    anonymous: bool = False


class ForumCategory(BaseModel):
    name: str
    icon: str
    topics: int = 0
    posts: int = 0


# ---------- Resources ----------

class Resource(BaseModel):
    id: str
    title: str
    description: str
    type: Literal["Guide", "Template", "Article"]
    category: str
    file: Optional[str] = Field(None, description="Hosted asset name, if any")
    views: int = Field(0, ge=0)
    downloads: int = Field(0, ge=0)


# ---------- Lawyers ----------

class Education(WireModel):
    institution: str
    degree: str
    graduation_year: int = Field(..., alias="graduationYear")


class Coordinates(BaseModel):
    latitude: float
    longitude: float


class OfficeAddress(WireModel):
    street: str
    city: str
    state: str
    zip_code: str = Field(..., alias="zipCode")
    country: str
    coordinates: Optional[Coordinates] = None


class Availability(WireModel):
    day: str
    start_time: str = Field(..., alias="startTime")
    end_time: str = Field(..., alias="endTime")


class Lawyer(WireModel):
    id: str
    name: str
    email: str
    mobile: Optional[str] = None
    profile_image: str = Field(DEFAULT_AVATAR, alias="profileImage")
    practice_areas: List[str] = Field(default_factory=list, alias="practiceAreas")
    service_types: List[str] = Field(default_factory=list, alias="serviceTypes")
    education: List[Education] = Field(default_factory=list)
    languages: List[str] = Field(default_factory=list)
    office_address: Optional[OfficeAddress] = Field(None, alias="officeAddress")
    consultation_fee: int = Field(0, ge=0, alias="consultationFee")
    availability: List[Availability] = Field(default_factory=list)
    is_verified: bool = Field(False, alias="isVerified")


# ---------- Users ----------

class User(WireModel):
    id: str
    name: str
    email: str
    mobile: Optional[str] = None
    location: Optional[str] = None
    bio: Optional[str] = None
    profile_image: str = Field(DEFAULT_AVATAR, alias="profileImage")
    role: Literal["user", "lawyer"] = "user"


class ProfileUpdate(BaseModel):
    model_config = ConfigDict(str_strip_whitespace=True)

    name: Optional[str] = Field(None, min_length=1)
    mobile: Optional[str] = None
    location: Optional[str] = None
    bio: Optional[str] = None
