"""Re-export individual schema modules for easy imports."""

from .user import UserCreate, UserOut, TokenOut
from .prefs import UserPrefsIn, UserPrefsOut
from .dish import DishIn, DishOut
from .meal import MealLogIn, MealLogOut
from .rec import RecommendationOut, RecResponse

__all__ = [
    "UserCreate",
    "UserOut",
    "TokenOut",
    "UserPrefsIn",
    "UserPrefsOut",
    "DishIn",
    "DishOut",
    "MealLogIn",
    "MealLogOut",
    "RecommendationOut",
    "RecResponse",
]
