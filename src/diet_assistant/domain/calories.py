"""Daily calorie target calculators."""

from typing import Protocol

from diet_assistant.domain.body import ActivityLevel, Gender

DEFAULT_TARGET_CALORIES = 2000


class BodyProfile(Protocol):
    """Measurements the formulas read from a profile."""

    gender: Gender
    height_cm: float
    age: int
    weight_kg: float
    activity_level: ActivityLevel
    calculation_method: str


class CalorieCalculator(Protocol):
    """Strategy computing a daily calorie target for a profile."""

    def calculate(self, profile: BodyProfile) -> int:
        """Return the daily target in kcal."""


class HarrisBenedictCalculator(CalorieCalculator):
    """Revised Harris-Benedict equation."""

    def calculate(self, profile: BodyProfile) -> int:
        if profile.gender is Gender.MALE:
            bmr = (
                88.362
                + 13.397 * profile.weight_kg
                + 4.799 * profile.height_cm
                - 5.677 * profile.age
            )
        else:
            bmr = (
                447.593
                + 9.247 * profile.weight_kg
                + 3.098 * profile.height_cm
                - 4.330 * profile.age
            )
        return int(bmr * profile.activity_level.factor)


class MifflinStJeorCalculator(CalorieCalculator):
    """Mifflin-St Jeor equation."""

    def calculate(self, profile: BodyProfile) -> int:
        base = 10.0 * profile.weight_kg + 6.25 * profile.height_cm - 5.0 * profile.age
        bmr = base + 5.0 if profile.gender is Gender.MALE else base - 161.0
        return int(bmr * profile.activity_level.factor)


CALCULATORS: dict[str, CalorieCalculator] = {
    "harris-benedict": HarrisBenedictCalculator(),
    "mifflin-st-jeor": MifflinStJeorCalculator(),
}


def target_calories(profile: BodyProfile) -> int:
    """Return the profile's target, or the default for unknown methods."""
    calculator = CALCULATORS.get(profile.calculation_method)
    if calculator is None:
        return DEFAULT_TARGET_CALORIES
    return calculator.calculate(profile)
