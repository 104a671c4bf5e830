"""
Field validation for articles and comments.

Both validators are pure functions from a candidate record to a
``ValidationResult``.  A candidate is anything exposing the relevant
attributes: a request schema, an ORM instance, or a plain namespace.
Every rule runs on every pass so callers can surface all problems at once.

Presence follows the usual "blank" notion: ``None``, the empty string and
whitespace-only strings are all missing.  Length is measured on the raw
value, and an absent value has length 0, so a missing title also fails the
range check.
"""
from typing import Annotated, Any, Literal, Union

from pydantic import BaseModel, ConfigDict, Field, computed_field

from blog.config import ValidationRules, settings


# ---------------------------------------------------------------------------
# Failure variants
# ---------------------------------------------------------------------------

class MissingField(BaseModel):
    kind: Literal["missing_field"] = "missing_field"
    field: str

    model_config = ConfigDict(frozen=True)


class LengthOutOfRange(BaseModel):
    kind: Literal["length_out_of_range"] = "length_out_of_range"
    field: str
    min: int
    max: int

    model_config = ConfigDict(frozen=True)


class LengthTooShort(BaseModel):
    kind: Literal["length_too_short"] = "length_too_short"
    field: str
    min: int

    model_config = ConfigDict(frozen=True)


FieldFailure = Annotated[
    Union[MissingField, LengthOutOfRange, LengthTooShort],
    Field(discriminator="kind"),
]


class ValidationResult(BaseModel):
    failures: list[FieldFailure] = []

    @computed_field
    @property
    def ok(self) -> bool:
        return not self.failures

    def for_field(self, field: str) -> list[FieldFailure]:
        """Return the failures reported against *field*."""
        return [f for f in self.failures if f.field == field]


# ---------------------------------------------------------------------------
# Rule helpers
# ---------------------------------------------------------------------------

def is_blank(value: Any) -> bool:
    if value is None:
        return True
    if isinstance(value, str):
        return not value.strip()
    return False


def _length(value: Any) -> int:
    return 0 if value is None else len(value)


def _check_presence(candidate: Any, field: str, failures: list) -> None:
    if is_blank(getattr(candidate, field, None)):
        failures.append(MissingField(field=field))


def _check_range(candidate: Any, field: str, lo: int, hi: int, failures: list) -> None:
    length = _length(getattr(candidate, field, None))
    if not lo <= length <= hi:
        failures.append(LengthOutOfRange(field=field, min=lo, max=hi))


def _check_minimum(candidate: Any, field: str, lo: int, failures: list) -> None:
    if _length(getattr(candidate, field, None)) < lo:
        failures.append(LengthTooShort(field=field, min=lo))


# ---------------------------------------------------------------------------
# Validators
# ---------------------------------------------------------------------------

def validate_article(candidate: Any, rules: ValidationRules | None = None) -> ValidationResult:
    """Check an article candidate's ``title`` and ``body``."""
    rules = rules or settings.RULES
    failures: list[FieldFailure] = []
    _check_presence(candidate, "title", failures)
    _check_range(candidate, "title", rules.TITLE_MIN_LENGTH, rules.TITLE_MAX_LENGTH, failures)
    _check_presence(candidate, "body", failures)
    _check_minimum(candidate, "body", rules.BODY_MIN_LENGTH, failures)
    return ValidationResult(failures=failures)


def validate_comment(candidate: Any, rules: ValidationRules | None = None) -> ValidationResult:
    """Check a comment candidate's ``commenter`` and ``body``."""
    rules = rules or settings.RULES
    failures: list[FieldFailure] = []
    _check_presence(candidate, "commenter", failures)
    _check_presence(candidate, "body", failures)
    _check_minimum(candidate, "body", rules.BODY_MIN_LENGTH, failures)
    return ValidationResult(failures=failures)
