"""Privacy levels for shared CV links.

The naming follows the stored values: ``none`` means no privacy protection
(everything shown) and ``full`` means full protection (anonymized).
"""

from __future__ import annotations

from enum import StrEnum


class PrivacyLevel(StrEnum):
    NONE = "none"
    PERSONAL = "personal"
    FULL = "full"


PLACEHOLDER_NAME = "Anonymous"

# Bytes of randomness in a share token (before base64url encoding).
SHARE_TOKEN_BYTES = 8
