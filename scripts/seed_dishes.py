"""
Seed a small demo catalog into the `dishes` table.

Usage
-----

    # default hard-coded set of Indian dishes
    python -m scripts.seed_dishes

    # create tables first (fresh database)
    python -m scripts.seed_dishes --create-tables

    # custom list (same schema as POST /api/v1/dishes) in a JSON file
    python -m scripts.seed_dishes --file path/to/dishes.json
"""
from __future__ import annotations

import argparse
import asyncio
import json
import logging
from pathlib import Path
from typing import Any, List

from api.v1.schemas import DishIn
from services.db import Dish, create_tables, session_scope

_LOG = logging.getLogger(__name__)

# ────────────────────────────────────────────────────────────────────
_DEFAULT_DISHES: List[dict[str, Any]] = [
    {
        "name": "Masala Dosa",
        "type": "Veg",
        "cuisine": "South Indian",
        "ingredients": ["rice", "urad dal", "potato", "onion"],
        "calories": 350,
        "nutrition": {"protein": 8, "carbs": 55, "fat": 10},
        "dietaryTags": ["vegetarian"],
        "spiceLevel": "medium",
        "difficulty": "medium",
        "prepTime": 30,
    },
    {
        "name": "Idli Sambar",
        "type": "Veg",
        "cuisine": "South Indian",
        "ingredients": ["rice", "urad dal", "toor dal", "tamarind"],
        "calories": 280,
        "nutrition": {"protein": 10, "carbs": 50, "fat": 3},
        "dietaryTags": ["vegetarian", "vegan"],
        "spiceLevel": "mild",
        "difficulty": "easy",
        "prepTime": 20,
    },
    {
        "name": "Butter Chicken",
        "type": "Non-Veg",
        "cuisine": "North Indian",
        "ingredients": ["chicken", "butter", "tomato", "cream"],
        "calories": 650,
        "nutrition": {"protein": 38, "carbs": 14, "fat": 45},
        "dietaryTags": ["high-protein"],
        "spiceLevel": "medium",
        "difficulty": "medium",
        "prepTime": 45,
    },
    {
        "name": "Palak Paneer",
        "type": "Veg",
        "cuisine": "Punjabi",
        "ingredients": ["spinach", "paneer", "garlic"],
        "calories": 520,
        "nutrition": {"protein": 24, "carbs": 18, "fat": 36},
        "dietaryTags": ["vegetarian", "gluten-free"],
        "spiceLevel": "mild",
        "difficulty": "easy",
        "prepTime": 35,
    },
    {
        "name": "Chicken Chettinad",
        "type": "Non-Veg",
        "cuisine": "South Indian",
        "ingredients": ["chicken", "coconut", "black pepper", "red chilli"],
        "calories": 580,
        "nutrition": {"protein": 40, "carbs": 12, "fat": 38},
        "dietaryTags": ["gluten-free", "high-protein"],
        "spiceLevel": "extra-hot",
        "difficulty": "hard",
        "prepTime": 60,
    },
    {
        "name": "Dhokla",
        "type": "Veg",
        "cuisine": "Gujarati",
        "ingredients": ["gram flour", "yogurt", "mustard seeds"],
        "calories": 160,
        "nutrition": {"protein": 6, "carbs": 24, "fat": 4},
        "dietaryTags": ["vegetarian", "gluten-free"],
        "spiceLevel": "mild",
        "difficulty": "easy",
        "prepTime": 25,
    },
]


async def _seed(dishes: list[dict[str, Any]], create: bool) -> None:
    if create:
        await create_tables()
    # validate everything before touching the DB
    rows = [DishIn.model_validate(d) for d in dishes]
    async with session_scope() as db:
        for d in rows:
            db.add(Dish(**d.model_dump(mode="json")))
        await db.commit()
    _LOG.info("inserted %d dishes", len(rows))


def _load_json(path: Path) -> list[dict[str, Any]]:
    data = json.loads(path.read_text())
    if not isinstance(data, list):
        raise ValueError("JSON file must contain a list of dish dictionaries")
    return data


def main() -> None:
    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(message)s")
    parser = argparse.ArgumentParser()
    parser.add_argument(
        "--file",
        type=Path,
        help="optional JSON file with dishes to seed (overrides defaults)",
    )
    parser.add_argument(
        "--create-tables",
        action="store_true",
        help="run CREATE TABLE for all models before seeding",
    )
    args = parser.parse_args()

    dishes = _load_json(args.file) if args.file else _DEFAULT_DISHES
    asyncio.run(_seed(dishes, args.create_tables))


if __name__ == "__main__":
    main()
