"""Field validation shared by user creation and update."""

from __future__ import annotations

import re
from datetime import datetime, timezone

from ..domain.errors import ValidationError
from .dto import UserInput, ValidatedUserInput

NAME_MAX_LENGTH = 100
ADDRESS_MAX_LENGTH = 250
DESCRIPTION_MAX_LENGTH = 1000

DATE_OF_BIRTH_FORMAT = "%Y-%m-%d"
# strptime alone accepts "1995-9-3", so the shape is checked first.
_DATE_OF_BIRTH_SHAPE = re.compile(r"\d{4}-\d{2}-\d{2}", re.ASCII)


def parse_date_of_birth(raw: str) -> datetime:
    """Parse a strict ``YYYY-MM-DD`` date into a UTC timestamp.

    The date is read as local midnight and converted to UTC, so only the
    date part carries meaning.
    """
    if not _DATE_OF_BIRTH_SHAPE.fullmatch(raw):
        raise ValidationError("An invalid date of birth was provided")
    try:
        parsed = datetime.strptime(raw, DATE_OF_BIRTH_FORMAT)
        # Local midnight of year 1 or 9999 can fall outside datetime's range in UTC.
        return parsed.astimezone(timezone.utc)
    except (ValueError, OverflowError) as exc:
        raise ValidationError("An invalid date of birth was provided") from exc


def _check_length(value: str | None, field_name: str, max_length: int) -> None:
    if value and len(value) > max_length:
        raise ValidationError(
            f"The {field_name} max length is {max_length} characters"
        )


def validate_user_input(data: UserInput) -> ValidatedUserInput:
    """Validate the supplied fields of ``data``.

    Only fields that are present are checked. The first violated constraint
    raises ``ValidationError``.
    """
    dob = parse_date_of_birth(data.dob) if data.dob else None

    _check_length(data.address, "address", ADDRESS_MAX_LENGTH)
    _check_length(data.name, "name", NAME_MAX_LENGTH)
    _check_length(data.description, "description", DESCRIPTION_MAX_LENGTH)

    return ValidatedUserInput(
        name=data.name,
        address=data.address,
        description=data.description,
        dob=dob,
    )


def require_creation_fields(data: UserInput) -> None:
    if not data.name:
        raise ValidationError("The name must be specified")
    if not data.dob:
        raise ValidationError("The date of birth must be specified")
    if not data.address:
        raise ValidationError("The address must be specified")
