"""Daily summary models."""

from dataclasses import dataclass


@dataclass(frozen=True)
class DailySummary:
    """Consumed calories compared with the profile target for one date."""

    date_key: str
    target_calories: int
    consumed_calories: int

    @property
    def difference(self) -> int:
        """Consumed minus target; negative means calories are still available."""
        return self.consumed_calories - self.target_calories

    @property
    def status(self) -> str:
        if self.difference < 0:
            return "under"
        if self.difference > 0:
            return "over"
        return "met"
