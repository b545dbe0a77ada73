# base/security.py
from django.conf import settings
from django.utils.crypto import constant_time_compare

REVEAL_SESSION_KEY = "id_card_reveal_granted"


def mask_id_card(value: str) -> str:
    """Keep the first 6 and last 4 characters: 110101********1234."""
    if not value or len(value) < 10:
        return value or ""
    return f"{value[:6]}{'*' * (len(value) - 10)}{value[-4:]}"


def verify_reveal_password(password: str) -> bool:
    expected = getattr(settings, "REVEAL_PASSWORD", "")
    # An unset password never unlocks anything
    if not expected or not password:
        return False
    return constant_time_compare(password, expected)


def grant_reveal(request) -> None:
    request.session[REVEAL_SESSION_KEY] = True


def can_reveal(request) -> bool:
    """Full ID cards are shown only when asked for (?reveal=1) and the session passed the password check."""
    return request.GET.get("reveal") == "1" and bool(request.session.get(REVEAL_SESSION_KEY))
