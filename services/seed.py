"""
Database Seeding

Loads the sample catalog in bulk. Rows are inserted without the per-write
hooks; the aggregates and the search index are then built for everything at
once, inside the same transaction.
"""

import json

from sqlalchemy import func, select

from constants import seed_data
from models import db, Author, Category, Recipe, RecipeCategory, Review
from utils.logger import get_logger
from .aggregates import rebuild_all_aggregates
from .catalog import normalize_recipe_fields
from .search_index import rebuild_search_index
from .transaction import write_transaction

logger = get_logger(__name__)


def seed_database():
    """
    Populate an empty catalog with the sample data.

    Returns False (and writes nothing) when recipes already exist.
    """
    if db.session.scalar(select(func.count(Recipe.id))):
        logger.info("Catalog already has recipes, skipping seed")
        return False

    with write_transaction("seed catalog") as session:
        categories = {}
        for slug, name, description, featured, sort_order in seed_data.CATEGORIES:
            category = Category(
                slug=slug, name=name, description=description,
                image_url=f'/images/categories/{slug}.jpg',
                featured=featured, sort_order=sort_order,
            )
            session.add(category)
            categories[slug] = category

        authors = {}
        for data in seed_data.AUTHORS:
            author = Author(
                name=data['name'], email=data['email'], bio=data['bio'],
                avatar_url=data['avatar_url'],
                social_links=json.dumps(data['social_links']),
            )
            session.add(author)
            authors[data['email']] = author
        session.flush()

        recipes = {}
        for data in seed_data.RECIPES:
            fields = {k: v for k, v in data.items() if k not in ('author', 'categories')}
            fields = normalize_recipe_fields(fields)
            recipe = Recipe(author_id=authors[data['author']].id, **fields)
            session.add(recipe)
            recipes[data['slug']] = (recipe, data['categories'])
        session.flush()

        for recipe, category_slugs in recipes.values():
            for slug in category_slugs:
                session.add(RecipeCategory(recipe_id=recipe.id, category_id=categories[slug].id))

        for slug, name, email, rating, title, comment, helpful in seed_data.REVIEWS:
            session.add(Review(
                recipe_id=recipes[slug][0].id, reviewer_name=name, reviewer_email=email,
                rating=rating, title=title, comment=comment, helpful_count=helpful,
            ))
        session.flush()

        rebuild_all_aggregates()
        rebuild_search_index()

    logger.info(
        "Seeded %d categories, %d authors, %d recipes, %d reviews",
        len(seed_data.CATEGORIES), len(seed_data.AUTHORS),
        len(seed_data.RECIPES), len(seed_data.REVIEWS),
    )
    return True
