"""Profile record types, patch normalization, and the completeness check.

A profile is merged from partial patches sent by the wizard. Every string
is trimmed; omitted fields keep their current value. The display name is
derived from first/last name unless the patch sets it explicitly.
"""

from dataclasses import dataclass, field, replace
from datetime import datetime


@dataclass(frozen=True)
class ProfileRecord:
    """Profile details for one account."""

    user_id: str
    name: str = ""
    first_name: str = ""
    last_name: str = ""
    target_role: str = ""
    years_exp: str = ""
    country: str = ""
    city: str = ""
    linkedin_url: str = ""
    portfolio_url: str = ""
    allow_linkedin_analysis: bool = False
    employment_types: tuple[str, ...] = ()
    profile_skipped: bool = False
    created_at: datetime | None = None
    updated_at: datetime | None = None


@dataclass(frozen=True)
class ProfilePatch:
    """Partial profile update. None means "not supplied"."""

    user_id: str
    name: str | None = None
    first_name: str | None = None
    last_name: str | None = None
    target_role: str | None = None
    years_exp: str | None = None
    country: str | None = None
    city: str | None = None
    linkedin_url: str | None = None
    portfolio_url: str | None = None
    allow_linkedin_analysis: bool | None = None
    employment_types: list[str] | None = field(default=None, hash=False)
    profile_skipped: bool | None = None


_TEXT_FIELDS = (
    "first_name",
    "last_name",
    "target_role",
    "years_exp",
    "country",
    "city",
    "linkedin_url",
    "portfolio_url",
)

_FLAG_FIELDS = ("allow_linkedin_analysis", "profile_skipped")


def default_profile(user_id: str) -> ProfileRecord:
    """Empty profile for an account with nothing cached or stored."""
    return ProfileRecord(user_id=user_id)


def _trim_or_keep(value: str | None, fallback: str) -> str:
    if value is None:
        return fallback
    return value.strip()


def derive_name(first_name: str, last_name: str, fallback: str) -> str:
    """Join first and last name; use fallback when both are blank."""
    full = f"{first_name} {last_name}".strip()
    return full or fallback


def normalize_tags(tags: list[str]) -> tuple[str, ...]:
    """Trim employment type tags and drop empty ones."""
    return tuple(tag.strip() for tag in tags if tag.strip())


def apply_profile_patch(current: ProfileRecord, patch: ProfilePatch) -> ProfileRecord:
    """Merge a partial update into the current profile.

    Name rules:
    - Patch sets name: trimmed value, or first+last if that trims to "".
    - Patch omits name: first+last (after applying the patch), else the
      current name, else "".

    employment_types, when supplied, replaces the stored list wholesale.

    Args:
        current: Profile as currently cached/stored.
        patch: Fields to update.

    Returns:
        New ProfileRecord; store timestamps are carried over from current.
    """
    updates: dict[str, object] = {
        name: _trim_or_keep(getattr(patch, name), getattr(current, name))
        for name in _TEXT_FIELDS
    }
    first_name = str(updates["first_name"])
    last_name = str(updates["last_name"])

    if patch.name is not None:
        name = patch.name.strip() or derive_name(first_name, last_name, "")
    else:
        name = derive_name(first_name, last_name, current.name)
    updates["name"] = name

    for flag in _FLAG_FIELDS:
        value = getattr(patch, flag)
        if value is not None:
            updates[flag] = value

    if patch.employment_types is not None:
        updates["employment_types"] = normalize_tags(patch.employment_types)

    return replace(current, **updates)


def is_profile_completed(record: ProfileRecord) -> bool:
    """Target role set and either split name or legacy full name set."""
    has_target_role = bool(record.target_role.strip())
    has_split_name = bool(record.first_name.strip() and record.last_name.strip())
    has_legacy_name = bool(record.name.strip())
    return has_target_role and (has_split_name or has_legacy_name)
