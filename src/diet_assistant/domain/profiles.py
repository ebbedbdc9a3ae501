"""User profile domain models."""

from dataclasses import dataclass, replace

from diet_assistant.domain.body import ActivityLevel, Gender
from diet_assistant.domain.calories import target_calories

DEFAULT_CALCULATION_METHOD = "harris-benedict"


@dataclass(frozen=True)
class UserProfile:
    """Body measurements and preferences used for calorie targets."""

    username: str
    gender: Gender
    height_cm: float
    age: int
    weight_kg: float
    activity_level: ActivityLevel
    calculation_method: str = DEFAULT_CALCULATION_METHOD

    def daily_target_calories(self) -> int:
        """Return the target computed by the profile's calculation method."""
        return target_calories(self)

    def with_changes(self, **changes: object) -> "UserProfile":
        """Return an edited copy of the profile."""
        return replace(self, **changes)
