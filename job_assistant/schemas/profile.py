"""Profile request/response schemas.

Patch fields are all optional; omitted fields keep their stored value.
URLs may be blank (clears the link) but otherwise need an explicit
http(s) scheme.
"""

from datetime import datetime
from typing import Annotated

from pydantic import (
    AnyHttpUrl,
    BaseModel,
    ConfigDict,
    StrictBool,
    StringConstraints,
    TypeAdapter,
    field_validator,
)
from pydantic import ValidationError as PydanticValidationError
from pydantic.alias_generators import to_camel

from job_assistant.schemas.onboarding import UserId
from job_assistant.services.profile_record import ProfilePatch, ProfileRecord

MAX_URL_LENGTH = 500
MAX_EMPLOYMENT_TYPE_LENGTH = 60

_http_url = TypeAdapter(AnyHttpUrl)


ShortText = Annotated[str, StringConstraints(strict=True, max_length=50)]
NameText = Annotated[str, StringConstraints(strict=True, max_length=80)]
LongText = Annotated[str, StringConstraints(strict=True, max_length=120)]
UrlText = Annotated[str, StringConstraints(strict=True, max_length=MAX_URL_LENGTH)]
TagText = Annotated[
    str, StringConstraints(strict=True, max_length=MAX_EMPLOYMENT_TYPE_LENGTH)
]


class UpsertProfileRequest(BaseModel):
    """Request body for POST /profile."""

    model_config = ConfigDict(
        extra="forbid",
        alias_generator=to_camel,
        populate_by_name=True,
    )

    user_id: UserId
    name: LongText | None = None
    first_name: NameText | None = None
    last_name: NameText | None = None
    target_role: LongText | None = None
    years_exp: ShortText | None = None
    country: NameText | None = None
    city: NameText | None = None
    linkedin_url: UrlText | None = None
    portfolio_url: UrlText | None = None
    allow_linkedin_analysis: StrictBool | None = None
    employment_types: list[TagText] | None = None
    profile_skipped: StrictBool | None = None

    @field_validator("linkedin_url", "portfolio_url")
    @classmethod
    def check_url_has_scheme(cls, value: str | None) -> str | None:
        """Blank is allowed; anything else must be an absolute http(s) URL."""
        if value is None or not value.strip():
            return value
        try:
            _http_url.validate_python(value.strip())
        except PydanticValidationError as exc:
            msg = "must be a URL with an explicit http:// or https:// scheme"
            raise ValueError(msg) from exc
        return value

    def to_patch(self) -> ProfilePatch:
        return ProfilePatch(
            user_id=self.user_id,
            name=self.name,
            first_name=self.first_name,
            last_name=self.last_name,
            target_role=self.target_role,
            years_exp=self.years_exp,
            country=self.country,
            city=self.city,
            linkedin_url=self.linkedin_url,
            portfolio_url=self.portfolio_url,
            allow_linkedin_analysis=self.allow_linkedin_analysis,
            employment_types=self.employment_types,
            profile_skipped=self.profile_skipped,
        )


class ProfileResponse(BaseModel):
    """Profile plus the derived completeness flag."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    user_id: str
    name: str
    first_name: str
    last_name: str
    target_role: str
    years_exp: str
    country: str
    city: str
    linkedin_url: str
    portfolio_url: str
    allow_linkedin_analysis: bool
    employment_types: list[str]
    profile_skipped: bool
    created_at: datetime | None = None
    updated_at: datetime | None = None
    is_completed: bool

    @classmethod
    def from_record(
        cls, record: ProfileRecord, *, is_completed: bool
    ) -> "ProfileResponse":
        return cls(
            user_id=record.user_id,
            name=record.name,
            first_name=record.first_name,
            last_name=record.last_name,
            target_role=record.target_role,
            years_exp=record.years_exp,
            country=record.country,
            city=record.city,
            linkedin_url=record.linkedin_url,
            portfolio_url=record.portfolio_url,
            allow_linkedin_analysis=record.allow_linkedin_analysis,
            employment_types=list(record.employment_types),
            profile_skipped=record.profile_skipped,
            created_at=record.created_at,
            updated_at=record.updated_at,
            is_completed=is_completed,
        )
