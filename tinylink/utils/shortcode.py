import re
import secrets
import string

# Base62 alphabet, case-sensitive
ALPHABET = string.ascii_uppercase + string.ascii_lowercase + string.digits
MIN_CODE_LENGTH = 6
MAX_CODE_LENGTH = 8

SHORT_CODE_PATTERN = re.compile(r"[A-Za-z0-9]{6,8}")


def generate_short_code() -> str:
    """Generate a random 6-8 character alphanumeric code.

    Length and symbols both come from the ``secrets`` CSPRNG. Uniqueness is
    not checked here.
    """
    length = MIN_CODE_LENGTH + secrets.randbelow(MAX_CODE_LENGTH - MIN_CODE_LENGTH + 1)
    return ''.join(secrets.choice(ALPHABET) for _ in range(length))


def validate_short_code(code) -> bool:
    """True when ``code`` is exactly 6 to 8 ASCII letters or digits."""
    if not isinstance(code, str):
        return False
    return SHORT_CODE_PATTERN.fullmatch(code) is not None
