"""
Pydantic Schemas - Request/Response Validation

All API request and response schemas in one file for simplicity.
Request schemas are permissive about presence (services own the business
validation and raise ValidationError); edit schemas forbid unknown fields.
"""

from pydantic import BaseModel, ConfigDict, Field, StrictInt, field_validator
from typing import Optional, List, Dict
from datetime import datetime
from enum import Enum


# ============================================================
# ENUMS
# ============================================================

class UserRole(str, Enum):
    student = "student"
    moderator = "moderator"


class ModerationStatus(str, Enum):
    pending = "pending"
    approved = "approved"
    rejected = "rejected"


class ContentType(str, Enum):
    text = "text"
    video = "video"
    pdf = "pdf"


# ============================================================
# AUTH / USER SCHEMAS
# ============================================================

class RegisterRequest(BaseModel):
    username: str = Field(..., min_length=3, max_length=50)
    password: str = Field(..., min_length=6)

    # strip before the length check runs
    @field_validator("username", mode="before")
    @classmethod
    def strip_username(cls, value):
        return value.strip() if isinstance(value, str) else value

class LoginRequest(BaseModel):
    username: str
    password: str

    @field_validator("username", mode="before")
    @classmethod
    def strip_username(cls, value):
        return value.strip() if isinstance(value, str) else value

class TokenResponse(BaseModel):
    access_token: str
    token_type: str = "bearer"
    user_id: str
    username: str
    role: UserRole

class ScoreEntry(BaseModel):
    topic: str
    high_score: int = 0
    last_score: int = 0
    last_attempt: Optional[datetime] = None

class LeetcodeStats(BaseModel):
    total_solved: int = 0
    easy_solved: int = 0
    medium_solved: int = 0
    hard_solved: int = 0
    ranking: int = 0
    contest_rating: float = 0
    total_contests: int = 0

class UserProfile(BaseModel):
    id: str
    username: str
    role: UserRole
    scores: List[ScoreEntry] = []
    solved_dsa: List[str] = []
    watched_content: List[str] = []
    dob: Optional[str] = None
    college: Optional[str] = None
    branch: Optional[str] = None
    leetcode_id: Optional[str] = None
    dp: Optional[str] = None
    leetcode_stats: Optional[LeetcodeStats] = None
    created_at: Optional[datetime] = None

class ProfileUpdate(BaseModel):
    model_config = ConfigDict(extra="forbid")

    dob: Optional[str] = None
    college: Optional[str] = None
    branch: Optional[str] = None
    leetcode_id: Optional[str] = None


# ============================================================
# CONTENT SCHEMAS
# ============================================================

class ContentSubmit(BaseModel):
    topic: Optional[str] = None
    question_text: Optional[str] = None
    explanation: Optional[str] = None
    source_url: Optional[str] = None
    dsa_problem_link: Optional[str] = None
    youtube_solution_link: Optional[str] = None
    youtube_embed_link: Optional[str] = None
    video_title: Optional[str] = None

class ContentOfficial(ContentSubmit):
    pdf_url: Optional[str] = None
    content_type: Optional[ContentType] = None

class ContentEdit(BaseModel):
    """Fields a moderator may rewrite. `status` goes through /status instead."""
    model_config = ConfigDict(extra="forbid")

    topic: Optional[str] = None
    question_text: Optional[str] = None
    explanation: Optional[str] = None
    source_url: Optional[str] = None
    dsa_problem_link: Optional[str] = None
    youtube_solution_link: Optional[str] = None
    youtube_embed_link: Optional[str] = None
    video_title: Optional[str] = None
    pdf_url: Optional[str] = None
    content_type: Optional[ContentType] = None

class ContentResponse(BaseModel):
    id: str
    topic: str
    question_text: Optional[str] = None
    explanation: Optional[str] = None
    source_url: Optional[str] = None
    dsa_problem_link: Optional[str] = None
    youtube_solution_link: Optional[str] = None
    youtube_embed_link: Optional[str] = None
    video_title: Optional[str] = None
    pdf_url: Optional[str] = None
    content_type: ContentType = ContentType.text
    status: ModerationStatus
    submitted_by: Optional[str] = None
    created_at: datetime
    updated_at: datetime

class ContentMessageResponse(BaseModel):
    message: str
    content: ContentResponse

class TopicBuckets(BaseModel):
    topic: str
    study: List[ContentResponse] = []
    videos: List[ContentResponse] = []
    dsa: List[ContentResponse] = []


# ============================================================
# QUIZ SCHEMAS
# ============================================================

class QuizSubmit(BaseModel):
    topic: Optional[str] = None
    question_text: Optional[str] = None
    options: Optional[List[str]] = None
    correct_answer: Optional[int] = None
    # Moderator "official" checkbox; ignored for students
    official: bool = False

class QuizEdit(BaseModel):
    model_config = ConfigDict(extra="forbid")

    topic: Optional[str] = None
    question_text: Optional[str] = None
    options: Optional[List[str]] = None
    correct_answer: Optional[int] = None

class QuizResponse(BaseModel):
    id: str
    topic: str
    question_text: str
    options: List[str]
    correct_answer: int
    status: ModerationStatus
    submitted_by: Optional[str] = None
    created_at: datetime
    updated_at: datetime

class QuizQuestionPublic(BaseModel):
    """What a student sees while attempting: no answer key."""
    id: str
    topic: str
    question_text: str
    options: List[str]

class QuizMessageResponse(BaseModel):
    message: str
    quiz: QuizResponse

class QuizAttemptRequest(BaseModel):
    topic: str
    # question id -> selected option index
    answers: Dict[str, StrictInt] = {}

class QuizAttemptResponse(BaseModel):
    topic: str
    score: int
    total_questions: int
    high_score: int


# ============================================================
# MODERATION / PROGRESS SCHEMAS
# ============================================================

class StatusUpdate(BaseModel):
    status: ModerationStatus

class DsaSolvedUpdate(BaseModel):
    solved: bool

class IdListResponse(BaseModel):
    ids: List[str]

class TopicProgress(BaseModel):
    topic: str
    total: int
    watched: int
    percentage: float

class DashboardResponse(BaseModel):
    scores: List[ScoreEntry]
    video_progress: List[TopicProgress]
    solved_dsa_count: int
    total_dsa_count: int


# ============================================================
# SUBJECT SCHEMAS
# ============================================================

class SubjectCreate(BaseModel):
    name: Optional[str] = None

class SubjectResponse(BaseModel):
    id: Optional[str] = None  # None for the synthetic "All" entry
    name: str


# ============================================================
# GENERIC SCHEMAS
# ============================================================

class MessageResponse(BaseModel):
    message: str
    success: bool = True

class ErrorResponse(BaseModel):
    detail: str
