"""
Profile mutation validation.

``build_update`` whitelists the editable profile fields from a raw JSON body
and returns a ``ProfilePatch``. A field the caller did not send stays
``UNSET`` and is never written; a field sent as ``null`` / empty becomes
``None`` (or ``[]`` for skills) and clears the stored value.
"""

from dataclasses import dataclass, fields
from typing import Any, Dict, List, Optional

from campushub.models.profile import RoleEnum
from campushub.services.errors import BadRequest

NAME_MIN_LENGTH = 3
NAME_MAX_LENGTH = 60
BIO_MAX_LENGTH = 600
SKILL_MAX_LENGTH = 40

# field → max length, matching the profile columns
ACADEMIC_MAX_LENGTHS = {
    "college": 200,
    "course": 150,
    "branch": 150,
    "year": 20,
}
ACADEMIC_FIELDS = tuple(ACADEMIC_MAX_LENGTHS)

# Marker for a field the caller did not supply
UNSET: Any = object()


@dataclass
class ProfilePatch:
    name: Any = UNSET
    college: Any = UNSET
    course: Any = UNSET
    branch: Any = UNSET
    year: Any = UNSET
    bio: Any = UNSET
    skills: Any = UNSET
    role: Any = UNSET

    def as_values(self) -> Dict[str, Any]:
        """Column → value for every supplied field."""
        return {
            f.name: getattr(self, f.name)
            for f in fields(self)
            if getattr(self, f.name) is not UNSET
        }

    def is_empty(self) -> bool:
        return not self.as_values()

    @property
    def has_role(self) -> bool:
        return self.role is not UNSET


# ── Field cleaners ──

def _clean_name(value: Any) -> str:
    if not isinstance(value, str):
        raise BadRequest("Name must be a string")
    name = value.strip()
    if len(name) < NAME_MIN_LENGTH:
        raise BadRequest(f"Name must be at least {NAME_MIN_LENGTH} characters")
    if len(name) > NAME_MAX_LENGTH:
        raise BadRequest("Name is too long")
    return name


def _clean_optional_text(field: str, value: Any) -> Optional[str]:
    if value is None:
        return None
    if field == "year" and isinstance(value, int) and not isinstance(value, bool):
        value = str(value)
    if not isinstance(value, str):
        raise BadRequest(f"{field} must be a string")
    text = value.strip()
    max_length = ACADEMIC_MAX_LENGTHS[field]
    if len(text) > max_length:
        raise BadRequest(f"{field} is too long (max {max_length} characters)")
    return text or None


def _clean_bio(value: Any) -> Optional[str]:
    if value is None:
        return None
    if not isinstance(value, str):
        raise BadRequest("Bio must be a string")
    bio = value.strip()
    if len(bio) > BIO_MAX_LENGTH:
        raise BadRequest(f"Bio is too long (max {BIO_MAX_LENGTH} characters)")
    return bio or None


def _clean_skills(value: Any) -> List[str]:
    if value is None:
        return []
    if not isinstance(value, list):
        raise BadRequest("Skills must be a list of strings")

    skills: List[str] = []
    seen = set()
    for raw in value:
        if not isinstance(raw, str):
            raise BadRequest("Skills must be a list of strings")
        skill = raw.strip()
        if not skill:
            continue
        if len(skill) > SKILL_MAX_LENGTH:
            raise BadRequest(f"Skill name is too long: {skill[:SKILL_MAX_LENGTH]}...")
        key = skill.lower()
        if key in seen:
            continue
        seen.add(key)
        skills.append(skill)
    return skills


def parse_role(value: Any) -> RoleEnum:
    try:
        return RoleEnum(value)
    except ValueError:
        allowed = ", ".join(r.value for r in RoleEnum)
        raise BadRequest(f"Invalid role. Must be one of: {allowed}")


# ═══════════════════════════════════════════════════════════════
#  build_update
# ═══════════════════════════════════════════════════════════════

def build_update(raw_fields: Any) -> ProfilePatch:
    """Validate a partial profile update; raises ``BadRequest`` on bad input."""
    if not isinstance(raw_fields, dict):
        raise BadRequest("Request body must be a JSON object")

    patch = ProfilePatch()

    if "name" in raw_fields:
        patch.name = _clean_name(raw_fields["name"])

    for field in ACADEMIC_FIELDS:
        if field in raw_fields:
            setattr(patch, field, _clean_optional_text(field, raw_fields[field]))

    # "about" is the older spelling of bio; bio wins when both are sent.
    if "bio" in raw_fields:
        patch.bio = _clean_bio(raw_fields["bio"])
    elif "about" in raw_fields:
        patch.bio = _clean_bio(raw_fields["about"])

    if "skills" in raw_fields:
        patch.skills = _clean_skills(raw_fields["skills"])

    if "role" in raw_fields:
        patch.role = parse_role(raw_fields["role"])

    if patch.is_empty():
        raise BadRequest("No fields provided")
    return patch
