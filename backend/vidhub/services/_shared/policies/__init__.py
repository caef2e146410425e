from .credentials import check_password_strength, normalize_email, normalize_username
from .ownership import OwnedResource, is_owner, require_ownership

__all__ = [
    "OwnedResource",
    "check_password_strength",
    "is_owner",
    "normalize_email",
    "normalize_username",
    "require_ownership",
]
