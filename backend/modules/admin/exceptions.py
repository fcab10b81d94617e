"""
Admin module exceptions.
"""

from shared.exceptions import ValidationError


class MissingSettingKeyError(ValidationError):
    """Raised when a site setting is saved without a key."""

    def __init__(self):
        super().__init__("Key is required", code="SETTING_KEY_REQUIRED")
