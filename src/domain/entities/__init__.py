"""Export the persisted domain entities.

Importing this package registers every table on the SQLModel metadata.
"""

from .user import User, utc_now
from .verification_token import VerificationToken

__all__ = ["User", "VerificationToken", "utc_now"]
