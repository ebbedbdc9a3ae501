"""Body attributes shared by profiles and calorie formulas."""

from enum import Enum


class Gender(Enum):
    """Gender used by the BMR formulas."""

    MALE = "Male"
    FEMALE = "Female"
    OTHER = "Other"

    @classmethod
    def parse(cls, raw: str) -> "Gender":
        """Parse user input, mapping anything unrecognized to OTHER."""
        value = raw.strip().lower()
        if value in {"m", "male"}:
            return cls.MALE
        if value in {"f", "female"}:
            return cls.FEMALE
        return cls.OTHER


class ActivityLevel(Enum):
    """Activity level with its TDEE multiplier."""

    SEDENTARY = ("Sedentary", 1.2)
    LIGHTLY_ACTIVE = ("LightlyActive", 1.375)
    MODERATELY_ACTIVE = ("ModeratelyActive", 1.55)
    VERY_ACTIVE = ("VeryActive", 1.725)
    EXTREMELY_ACTIVE = ("ExtremelyActive", 1.9)

    @property
    def label(self) -> str:
        return self.value[0]

    @property
    def factor(self) -> float:
        return self.value[1]

    @classmethod
    def parse(cls, raw: str) -> "ActivityLevel | None":
        """Parse a short name ("lightly") or a stored label ("LightlyActive")."""
        value = raw.strip().lower()
        for level in cls:
            short = level.label.lower().removesuffix("active")
            if value in {short, level.label.lower()}:
                return level
        return None
