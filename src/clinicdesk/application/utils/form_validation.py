"""Form validation rules.

Each rule is a small callable that inspects the submitted form (a mapping
of field name to raw value) and returns an error message or ``None``. A
``FormValidator`` runs its rules in order and stops at the first failure,
so each form reports exactly one message.
"""

import re
from datetime import date
from typing import Any, Callable, Iterable, Mapping, Optional, Sequence, Type

from ...core.utils.datetime_utils import parse_date
from ...domain.errors import FormValidationError
from ...domain.value_objects.money import MAX_AMOUNT, ZERO, to_money

Form = Mapping[str, Any]
Rule = Callable[[Form], Optional[str]]

REQUIRED_MESSAGE = "All fields are required."
PHONE_LENGTH = 10
_PHONE_RE = re.compile(rf"^[0-9]{{{PHONE_LENGTH}}}$")


def is_blank(value: Any) -> bool:
    if value is None:
        return True
    if isinstance(value, str):
        return not value.strip()
    if isinstance(value, (list, tuple, dict, set)):
        return len(value) == 0
    return False


def is_valid_phone(value: Any) -> bool:
    """Exactly ten ASCII decimal digits."""
    return isinstance(value, str) and bool(_PHONE_RE.match(value))


def is_positive_money(value: Any) -> bool:
    """A representable amount above zero and no larger than ``MAX_AMOUNT``."""
    if isinstance(value, bool) or is_blank(value):
        return False
    try:
        amount = to_money(value)
    except ValueError:
        return False
    return ZERO < amount <= MAX_AMOUNT


def is_positive_integer(value: Any, maximum: Optional[int] = None) -> bool:
    """Whole number of at least one (``"2"`` and ``2`` both qualify)."""
    if isinstance(value, bool):
        return False
    if isinstance(value, str) and value.strip().isdecimal():
        try:
            value = int(value.strip())
        except ValueError:
            # longer than the interpreter will convert
            return False
    if not isinstance(value, int) or value < 1:
        return False
    return maximum is None or value <= maximum


def required(*fields: str, message: str = REQUIRED_MESSAGE) -> Rule:
    def rule(form: Form) -> Optional[str]:
        for name in fields:
            if is_blank(form.get(name)):
                return message
        return None

    return rule


def phone(field: str, message: str = "Contact number must be exactly 10 digits.") -> Rule:
    def rule(form: Form) -> Optional[str]:
        return None if is_valid_phone(form.get(field)) else message

    return rule


def positive_money(field: str, message: str) -> Rule:
    def rule(form: Form) -> Optional[str]:
        return None if is_positive_money(form.get(field)) else message

    return rule


def positive_integer(
    field: str,
    message: str = "Quantity must be at least 1.",
    maximum: Optional[int] = None,
    too_large_message: str = "Quantity is too large.",
) -> Rule:
    def rule(form: Form) -> Optional[str]:
        value = form.get(field)
        if not is_positive_integer(value):
            return message
        return None if is_positive_integer(value, maximum) else too_large_message

    return rule


def one_of(field: str, choices: Iterable[str], message: str) -> Rule:
    allowed = frozenset(choices)

    def rule(form: Form) -> Optional[str]:
        return None if form.get(field) in allowed else message

    return rule


def enum_value(field: str, enum_cls: Type, message: str) -> Rule:
    return one_of(field, (member.value for member in enum_cls), message)


def past_date(field: str, message: str = "Please enter a valid date of birth.") -> Rule:
    """Parses as ``YYYY-MM-DD`` and is not after today."""

    def rule(form: Form) -> Optional[str]:
        try:
            value = parse_date(form.get(field))
        except (ValueError, TypeError, AttributeError):
            return message
        return None if value <= date.today() else message

    return rule


def each(field: str, rule: Rule) -> Rule:
    """Apply ``rule`` to every mapping in the list stored under ``field``."""

    def wrapped(form: Form) -> Optional[str]:
        for row in form.get(field) or []:
            error = rule(row)
            if error:
                return error
        return None

    return wrapped


class FormValidator:
    """Ordered rule set for one form."""

    def __init__(self, *rules: Rule) -> None:
        self._rules: Sequence[Rule] = rules

    def first_error(self, form: Form) -> Optional[str]:
        """Message of the first failing rule, or None when the form is valid."""
        for rule in self._rules:
            error = rule(form)
            if error:
                return error
        return None

    def validate(self, form: Form) -> None:
        """Raise ``FormValidationError`` carrying the first failure."""
        error = self.first_error(form)
        if error:
            raise FormValidationError(error)
