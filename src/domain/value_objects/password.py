"""Password Value Objects for domain modeling.

These value objects encapsulate the password strength policy so that
registration and password reset enforce exactly the same rules.

The policy requires:
    - At least 8 characters
    - At least one uppercase letter
    - At least one lowercase letter
    - At least one digit
    - At least one character that is neither a letter nor a digit

Violations are reported all at once, each with a stable machine-readable code
(``password.length``, ``password.uppercase``, ``password.lowercase``,
``password.number``, ``password.special``).
"""

import re
from dataclasses import asdict, dataclass
from typing import ClassVar, Dict, List

from src.core.exceptions import PasswordPolicyError


@dataclass(frozen=True)
class PasswordRuleViolation:
    """One unmet password requirement."""

    code: str
    message: str

    def to_dict(self) -> Dict[str, str]:
        return asdict(self)


@dataclass(frozen=True)
class Password:
    """Plain-text password candidate checked against the strength policy.

    Unlike most value objects this one does not raise on construction: both
    callers need the full list of violations to report them to the user.

    Attributes:
        value: The raw password string (immutable)
    """

    value: str

    MIN_LENGTH: ClassVar[int] = 8
    UPPERCASE: ClassVar[re.Pattern] = re.compile(r"[A-Z]")
    LOWERCASE: ClassVar[re.Pattern] = re.compile(r"[a-z]")
    DIGIT: ClassVar[re.Pattern] = re.compile(r"[0-9]")
    SPECIAL: ClassVar[re.Pattern] = re.compile(r"[^A-Za-z0-9]")

    def violations(self) -> List[PasswordRuleViolation]:
        """Every rule the password breaks, in policy order."""
        found: List[PasswordRuleViolation] = []

        if len(self.value) < self.MIN_LENGTH:
            found.append(PasswordRuleViolation(
                "password.length",
                f"Password must be at least {self.MIN_LENGTH} characters long",
            ))
        if not self.UPPERCASE.search(self.value):
            found.append(PasswordRuleViolation(
                "password.uppercase", "Password must contain at least one uppercase letter"
            ))
        if not self.LOWERCASE.search(self.value):
            found.append(PasswordRuleViolation(
                "password.lowercase", "Password must contain at least one lowercase letter"
            ))
        if not self.DIGIT.search(self.value):
            found.append(PasswordRuleViolation(
                "password.number", "Password must contain at least one number"
            ))
        if not self.SPECIAL.search(self.value):
            found.append(PasswordRuleViolation(
                "password.special", "Password must contain at least one special character"
            ))
        return found

    @property
    def is_acceptable(self) -> bool:
        return not self.violations()

    def ensure_acceptable(self) -> None:
        """Raise :class:`PasswordPolicyError` listing every violated rule."""
        found = self.violations()
        if found:
            raise PasswordPolicyError([violation.to_dict() for violation in found])

    def character_classes(self) -> int:
        """How many of upper, lower, digit and special characters appear."""
        patterns = (self.UPPERCASE, self.LOWERCASE, self.DIGIT, self.SPECIAL)
        return sum(1 for pattern in patterns if pattern.search(self.value))


def validate_password_strength(password: str) -> List[PasswordRuleViolation]:
    """Return the violated rules of ``password``; empty when it is acceptable."""
    return Password(password).violations()


def is_password_strength_acceptable(password: str) -> bool:
    return Password(password).is_acceptable


# Keyboard and alphabet runs penalized by the strength score.
_SEQUENCES = (
    "abcdefghijklmnopqrstuvwxyz",
    "qwertyuiop",
    "asdfghjkl",
    "zxcvbnm",
    "01234567890",
)
_REPEATED_RUN = re.compile(r"(.)\1+")


def calculate_password_strength(password: str) -> int:
    """Score a password from 0 (weakest) to 100 (strongest).

    Up to 40 points for length, 10 per character class present, a bonus of 10
    per class beyond the first, minus 2 per character in repeated runs
    (``aaa``) and minus 5 per three-character sequence (``abc``, ``qwe``,
    ``123``) found anywhere in the password.
    """
    if not password:
        return 0

    candidate = Password(password)
    classes = candidate.character_classes()

    score = min(40, len(password) * 4)
    score += classes * 10
    score += (classes - 1) * 10

    repeated = "".join(match.group(0) for match in _REPEATED_RUN.finditer(password))
    score -= len(repeated) * 2

    lowered = password.lower()
    for sequence in _SEQUENCES:
        for start in range(len(sequence) - 2):
            if sequence[start:start + 3] in lowered:
                score -= 5

    return max(0, min(100, score))


def get_password_strength_label(score: int) -> str:
    if score < 20:
        return "Very Weak"
    if score < 40:
        return "Weak"
    if score < 60:
        return "Moderate"
    if score < 80:
        return "Strong"
    return "Very Strong"
