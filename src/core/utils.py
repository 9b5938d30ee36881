import math
import re

_REMOTE_RE = re.compile(r"^(?:[a-z]+:)?//", re.IGNORECASE)


def sanitize_base_path(raw_path: str | None) -> str:
    """
    Normalize a configured base path.
    Blank, "." and "./" mean no base path; otherwise leading dots/slashes
    and trailing slashes are removed ("./viz/" -> "viz").
    """
    if not raw_path:
        return ""
    trimmed = raw_path.strip()
    if not trimmed or trimmed in (".", "./"):
        return ""
    return re.sub(r"/+$", "", re.sub(r"^[./]+", "", trimmed))


def is_absolute_location(path: str) -> bool:
    return bool(_REMOTE_RE.match(path)) or path.startswith("/")


def is_http_location(path: str) -> bool:
    return path.lower().startswith(("http://", "https://"))


def resolve_asset_path(path: str, base_path: str = "") -> str:
    """
    Prefix a relative asset path with the base path.
    URLs and absolute paths are returned untouched.
    """
    if not path:
        return path
    if is_absolute_location(path):
        return path
    sanitized = re.sub(r"^\./?", "", path)
    if not base_path:
        return sanitized
    return f"{base_path}/{sanitized}"


def extract_filename(path: str) -> str:
    parts = [p for p in path.split("/") if p]
    return parts[-1] if parts else path


def coerce_int(value, default: int = 0) -> int:
    # non-numeric and non-finite input -> default
    try:
        number = float(value)
    except (TypeError, ValueError):
        return default
    if not math.isfinite(number):
        return default
    return int(number)
