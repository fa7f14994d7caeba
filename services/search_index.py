"""
Search Index Service

Materializes one recipe_search_index row per recipe and answers substring
queries against it.

search_text is the lowercase concatenation, joined by single spaces, of:
title, description, tags, ingredients, instructions, each as its stored text.
Missing text fields contribute an empty string.
"""

from sqlalchemy import delete, select
from sqlalchemy.orm import joinedload

from models import db, Category, Recipe, RecipeCategory, RecipeSearchIndex
from utils.logger import get_logger

logger = get_logger(__name__)

SEARCH_FIELDS = ('title', 'description', 'tags', 'ingredients', 'instructions')


def build_search_text(recipe):
    """Flatten a recipe into its lowercase search blob. Pure and deterministic."""
    parts = []
    for field in SEARCH_FIELDS:
        value = getattr(recipe, field)
        parts.append('' if value is None else str(value))
    return ' '.join(parts).lower()


def rebuild_search_entry(recipe):
    """
    Replace the index row(s) for a recipe with a single fresh row.

    The recipe must already have an id (flush before calling).
    """
    db.session.execute(
        delete(RecipeSearchIndex)
        .where(RecipeSearchIndex.recipe_id == recipe.id)
        .execution_options(synchronize_session=False)
    )
    entry = RecipeSearchIndex(recipe_id=recipe.id, search_text=build_search_text(recipe))
    db.session.add(entry)
    db.session.flush()
    db.session.expire(recipe, ['search_entries'])
    logger.debug("Rebuilt search entry for recipe %s", recipe.id)
    return entry


def rebuild_search_index():
    """Rebuild the whole index from the current recipes table."""
    db.session.execute(
        delete(RecipeSearchIndex).execution_options(synchronize_session=False)
    )
    count = 0
    for recipe in db.session.scalars(select(Recipe).order_by(Recipe.id)):
        db.session.add(RecipeSearchIndex(recipe_id=recipe.id, search_text=build_search_text(recipe)))
        count += 1
    db.session.flush()
    db.session.expire_all()
    logger.info("Rebuilt search index for %d recipes", count)
    return count


def get_search_text(recipe_id):
    return db.session.scalar(
        select(RecipeSearchIndex.search_text).where(RecipeSearchIndex.recipe_id == recipe_id)
    )


def search_recipes(query, category=None, difficulty=None, max_time=None,
                   limit=20, offset=0, published_only=True):
    """
    Case-insensitive substring search over the index.

    The query is lowercased to match the index normalization; LIKE wildcards
    in the query are matched literally. Results are ordered by rating, then
    newest first.
    """
    needle = (query or '').strip().lower()
    if not needle:
        return []

    stmt = (
        select(Recipe)
        .join(RecipeSearchIndex, RecipeSearchIndex.recipe_id == Recipe.id)
        .where(RecipeSearchIndex.search_text.contains(needle, autoescape=True))
        .options(joinedload(Recipe.author))
    )
    if published_only:
        stmt = stmt.where(Recipe.status == 'published')
    if category:
        stmt = stmt.where(
            Recipe.id.in_(
                select(RecipeCategory.recipe_id)
                .join(Category, Category.id == RecipeCategory.category_id)
                .where(Category.slug == category)
            )
        )
    if difficulty:
        stmt = stmt.where(Recipe.difficulty == difficulty)
    if max_time is not None:
        stmt = stmt.where(Recipe.total_time <= max_time)

    stmt = stmt.order_by(Recipe.rating.desc(), Recipe.created_at.desc(), Recipe.id.desc())
    stmt = stmt.limit(limit).offset(offset)
    return list(db.session.scalars(stmt).unique())
