import re

# http:// or https:// followed by a host part, no whitespace anywhere
TARGET_URL_PATTERN = re.compile(r"https?://[^\s$.?#][^\s]+", re.IGNORECASE)


def is_valid_target_url(url) -> bool:
    if not isinstance(url, str) or not url:
        return False
    return TARGET_URL_PATTERN.fullmatch(url) is not None
