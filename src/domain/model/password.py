"""Password strength domain types."""

from dataclasses import dataclass, field


@dataclass(frozen=True)
class StrengthCriteria:
    """Outcome of each criterion check."""
    length: bool
    has_upper_case: bool
    has_lower_case: bool
    has_numbers: bool
    has_special_char: bool

    @property
    def satisfied_count(self) -> int:
        return sum((
            self.length,
            self.has_upper_case,
            self.has_lower_case,
            self.has_numbers,
            self.has_special_char,
        ))

    def to_dict(self) -> dict[str, bool]:
        return {
            'length': self.length,
            'hasUpperCase': self.has_upper_case,
            'hasLowerCase': self.has_lower_case,
            'hasNumbers': self.has_numbers,
            'hasSpecialChar': self.has_special_char,
        }


@dataclass
class StrengthFeedback:
    warnings: list[str] = field(default_factory=list)
    suggestions: list[str] = field(default_factory=list)

    @property
    def warning(self) -> str:
        """First warning raised, or an empty string."""
        return self.warnings[0] if self.warnings else ''

    def to_dict(self) -> dict:
        return {
            'warning': self.warning,
            'warnings': list(self.warnings),
            'suggestions': list(self.suggestions),
        }


@dataclass
class StrengthResult:
    """Score in [0, 4] with the criteria and feedback that produced it."""
    score: int
    criteria: StrengthCriteria
    feedback: StrengthFeedback
