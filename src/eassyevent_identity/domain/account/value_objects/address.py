"""Postal address of a venue."""

import re
from dataclasses import dataclass

from eassyevent_identity.domain.account.exceptions import AccountValidationError

PIN_CODE_PATTERN = re.compile(r"^\d{6}$")


def _required(value: str | None, field: str, label: str) -> str:
    if value is None or not value.strip():
        msg = f"{label} is required"
        raise AccountValidationError(msg, field=field)
    return value.strip()


@dataclass(frozen=True)
class Address:
    """Value object for a venue address with a 6-digit Indian PIN code."""

    line1: str
    city: str
    state: str
    pin_code: str
    line2: str | None = None

    def __post_init__(self) -> None:
        object.__setattr__(
            self, "line1", _required(self.line1, "address.line1", "Address line 1")
        )
        object.__setattr__(self, "city", _required(self.city, "address.city", "City"))
        object.__setattr__(
            self, "state", _required(self.state, "address.state", "State")
        )
        pin_code = _required(self.pin_code, "address.pin_code", "PIN code")
        if not PIN_CODE_PATTERN.match(pin_code):
            msg = "Please provide a valid 6-digit PIN code"
            raise AccountValidationError(msg, field="address.pin_code")
        object.__setattr__(self, "pin_code", pin_code)

        line2 = self.line2.strip() if self.line2 else None
        object.__setattr__(self, "line2", line2 or None)
