"""Domain models shared by the engine, the store adapter and the API."""

from .dish import Dish, DishType, Nutrition, SpiceLevel
from .meal import MealLogEntry, MealSlot
from .recommendation import RecommendationSet, RecommendedDish
from .user import UserPreferenceProfile

__all__ = [
    "Dish",
    "DishType",
    "Nutrition",
    "SpiceLevel",
    "MealLogEntry",
    "MealSlot",
    "RecommendationSet",
    "RecommendedDish",
    "UserPreferenceProfile",
]
