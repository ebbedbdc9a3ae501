"""In-memory food source and the seed catalog."""

from dataclasses import dataclass, field

from diet_assistant.domain.foods import Food
from diet_assistant.services.catalog import FoodSource


@dataclass
class StaticFoodSource(FoodSource):
    """Food source returning a fixed batch of foods."""

    foods: list[Food] = field(default_factory=list)

    def fetch_food_data(self) -> list[Food]:
        """Return a copy of the configured foods."""
        return list(self.foods)


def sample_foods() -> list[Food]:
    """Return the catalog used to seed an empty data directory."""
    basics = [
        Food.basic("chicken", "Chicken Breast", ["chicken", "meat", "protein"], 165),
        Food.basic("apple", "Apple", ["apple", "fruit"], 95),
        Food.basic("pb", "Peanut Butter", ["peanut", "butter"], 190),
        Food.basic("rice", "White Rice", ["rice", "grain"], 206),
        Food.basic("butter", "Butter", ["butter", "fat"], 102),
        Food.basic("bread", "Bread Slice", ["bread", "grain"], 80),
        Food.basic("egg", "Egg", ["egg", "protein"], 78),
        Food.basic("banana", "Banana", ["banana", "fruit"], 105),
        Food.basic("seeds", "Seeds", ["seed", "seeds"], 300),
        Food.basic("milk", "Whole Milk", ["milk", "dairy"], 149),
        Food.basic("sprout", "Sprouts", ["sprout", "sprouts"], 250),
        Food.basic("cheese", "Cheddar Cheese", ["cheese", "dairy"], 113),
    ]
    composites = [
        Food.composite(
            "pb_sandwich",
            "Peanut Butter Sandwich",
            ["sandwich", "peanut"],
            [("bread", 2), ("pb", 1)],
        ),
        Food.composite(
            "csalad",
            "Chicken Salad",
            ["salad", "chicken", "greens"],
            [("chicken", 2), ("sprout", 1)],
        ),
        Food.composite(
            "vada",
            "Medhu Vada",
            ["medhu", "vada"],
            [("rice", 2), ("sprout", 2)],
        ),
        Food.composite(
            "bshake",
            "Banana Shake",
            ["shake", "banana", "bananashake"],
            [("banana", 2), ("milk", 2)],
        ),
    ]
    return basics + composites
