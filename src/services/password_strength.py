"""Password strength scoring.

Pure function of the password string: five criteria, a base score of
satisfied criteria minus one, and a one-point penalty for common patterns.
"""

import re

from domain.model.password import StrengthCriteria, StrengthFeedback, StrengthResult

MIN_LENGTH = 8
MAX_SCORE = 4

SPECIAL_CHARS = '!@#$%^&*(),.?":{}|<>'

_UPPER_RE = re.compile(r'[A-Z]')
_LOWER_RE = re.compile(r'[a-z]')
_DIGIT_RE = re.compile(r'[0-9]')
_SPECIAL_RE = re.compile('[' + re.escape(SPECIAL_CHARS) + ']')

COMMON_PATTERNS = (
    re.compile(r'^123'),
    re.compile(r'password', re.IGNORECASE),
    re.compile(r'qwerty', re.IGNORECASE),
    re.compile(r'abc', re.IGNORECASE),
    re.compile(r'admin', re.IGNORECASE),
    re.compile(r'letmein', re.IGNORECASE),
    re.compile(r'welcome', re.IGNORECASE),
)

TOO_SHORT_WARNING = 'Password is too short'
COMMON_PATTERN_WARNING = 'Avoid common patterns like "123" or "password"'

SUGGESTIONS = {
    'length': f'Use at least {MIN_LENGTH} characters',
    'has_upper_case': 'Add uppercase letters',
    'has_lower_case': 'Add lowercase letters',
    'has_numbers': 'Add numbers',
    'has_special_char': 'Add special characters',
}


def evaluate_criteria(password: str) -> StrengthCriteria:
    return StrengthCriteria(
        length=len(password) >= MIN_LENGTH,
        has_upper_case=bool(_UPPER_RE.search(password)),
        has_lower_case=bool(_LOWER_RE.search(password)),
        has_numbers=bool(_DIGIT_RE.search(password)),
        has_special_char=bool(_SPECIAL_RE.search(password)),
    )


def matches_common_pattern(password: str) -> bool:
    return any(pattern.search(password) for pattern in COMMON_PATTERNS)


def _clamp(score: int) -> int:
    return max(0, min(MAX_SCORE, score))


def score_password(password: str) -> StrengthResult:
    """Score a password from 0 (weakest) to 4 (strongest).

    Warnings are collected in the order the checks run (length first,
    then common patterns); feedback.warning reports the first one.
    """
    criteria = evaluate_criteria(password)
    score = _clamp(criteria.satisfied_count - 1)

    feedback = StrengthFeedback()
    for name, suggestion in SUGGESTIONS.items():
        if not getattr(criteria, name):
            feedback.suggestions.append(suggestion)

    if not criteria.length:
        feedback.warnings.append(TOO_SHORT_WARNING)

    if matches_common_pattern(password):
        score = _clamp(score - 1)
        feedback.warnings.append(COMMON_PATTERN_WARNING)

    return StrengthResult(score=score, criteria=criteria, feedback=feedback)
