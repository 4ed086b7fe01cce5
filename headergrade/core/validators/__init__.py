from headergrade.core.validators.sanitizer import (
    is_valid_url,
    normalize_url,
    sanitize_text_field,
)

__all__ = ["is_valid_url", "normalize_url", "sanitize_text_field"]
