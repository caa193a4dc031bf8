"""Reference for the phone field's display mask.

The site rewrites whatever is typed into ``(ddd)ddd-dddd``, dropping
non-digits and anything past the tenth digit.
"""
import re

PHONE_DIGITS = 10
PHONE_DISPLAY_PATTERN = re.compile(r"^\(\d{3}\)\d{3}-\d{4}$")


def phone_digits(raw: str) -> str:
    """Digits of ``raw``, truncated to the ten the mask accepts."""
    return re.sub(r"\D", "", raw or "")[:PHONE_DIGITS]


def mask_phone(raw: str) -> str:
    """Render ``raw`` the way the phone input displays it.

    Partial input renders progressively (``(555``, ``(555)123``,
    ``(555)123-45``). Feeding the result back in yields the same string.
    """
    digits = phone_digits(raw)
    if not digits:
        return ""
    masked = "(" + digits[:3]
    if len(digits) > 3:
        masked += ")" + digits[3:6]
    if len(digits) > 6:
        masked += "-" + digits[6:]
    return masked


def is_complete(raw: str) -> bool:
    return len(phone_digits(raw)) == PHONE_DIGITS
