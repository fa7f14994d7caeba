"""
Aggregate Maintenance

Recomputes the denormalized counters from their source rows:

- categories.recipe_count  <- recipe_categories
- recipes.rating / review_count  <- reviews
- authors.recipe_count  <- recipes

Each refresh is a full recount issued as one UPDATE with a correlated
subquery, so it self-heals prior drift and the engine applies the
recompute-then-store under the row's write lock.

The per-row category and recipe refreshes are row updates like any other
and stamp updated_at in the same statement, never moving it backwards.
Author counts carry no stamp, and the bulk rebuild is a repair pass that
leaves every stamp as it was. None of these touch the search index.
"""

from flask import current_app, has_app_context
from sqlalchemy import case, func, select, update
from sqlalchemy.orm.util import identity_key

from models import db, Author, Category, Recipe, RecipeCategory, Review
from models.base import utcnow
from utils.logger import get_logger

logger = get_logger(__name__)


def _stamp(column):
    """updated_at value for an aggregate UPDATE: now, or the stored value if later."""
    now = utcnow()
    return case((column > now, column), else_=now)


def _expire_cached(model, ident, *attrs):
    """Drop stale attribute values for an instance already in the session."""
    obj = db.session.identity_map.get(identity_key(model, ident))
    if obj is not None:
        db.session.expire(obj, list(attrs))


def _rating_published_only(published_only):
    if published_only is not None:
        return published_only
    if has_app_context():
        return current_app.config.get('RATING_PUBLISHED_ONLY', False)
    return False


def _review_filter(recipe_id_expr, published_only):
    conditions = [Review.recipe_id == recipe_id_expr]
    if published_only:
        conditions.append(Review.status == 'published')
    return conditions


def refresh_category_recipe_count(category_id):
    """Set a category's recipe_count to the number of links pointing at it."""
    count = (
        select(func.count(RecipeCategory.id))
        .where(RecipeCategory.category_id == category_id)
        .scalar_subquery()
    )
    db.session.execute(
        update(Category)
        .where(Category.id == category_id)
        .values(recipe_count=count, updated_at=_stamp(Category.updated_at))
        .execution_options(synchronize_session=False)
    )
    _expire_cached(Category, category_id, 'recipe_count', 'updated_at')
    logger.debug("Recounted recipes for category %s", category_id)


def refresh_recipe_rating(recipe_id, published_only=None):
    """
    Recompute a recipe's rating and review_count from its reviews.

    rating is the mean review rating, or 0 when no reviews count.
    """
    published_only = _rating_published_only(published_only)
    conditions = _review_filter(recipe_id, published_only)

    mean = select(func.avg(Review.rating)).where(*conditions).scalar_subquery()
    count = select(func.count(Review.id)).where(*conditions).scalar_subquery()

    db.session.execute(
        update(Recipe)
        .where(Recipe.id == recipe_id)
        .values(
            rating=func.coalesce(mean, 0.0),
            review_count=count,
            updated_at=_stamp(Recipe.updated_at),
        )
        .execution_options(synchronize_session=False)
    )
    _expire_cached(Recipe, recipe_id, 'rating', 'review_count', 'updated_at')
    logger.debug("Recomputed rating for recipe %s (published_only=%s)", recipe_id, published_only)


def refresh_author_recipe_count(author_id):
    """Set an author's recipe_count to the number of recipes they own."""
    if author_id is None:
        return
    count = (
        select(func.count(Recipe.id))
        .where(Recipe.author_id == author_id)
        .scalar_subquery()
    )
    db.session.execute(
        update(Author)
        .where(Author.id == author_id)
        .values(recipe_count=count)
        .execution_options(synchronize_session=False)
    )
    _expire_cached(Author, author_id, 'recipe_count')
    logger.debug("Recounted recipes for author %s", author_id)


def rebuild_all_aggregates(published_only=None):
    """
    Recount every aggregate in one pass.

    Used after bulk loads (seeding, imports) and to repair drift. A repair
    is not a content change, so updated_at is not stamped here.
    """
    published_only = _rating_published_only(published_only)

    category_count = (
        select(func.count(RecipeCategory.id))
        .where(RecipeCategory.category_id == Category.id)
        .scalar_subquery()
    )
    db.session.execute(
        update(Category)
        .values(recipe_count=category_count)
        .execution_options(synchronize_session=False)
    )

    conditions = _review_filter(Recipe.id, published_only)
    mean = select(func.avg(Review.rating)).where(*conditions).scalar_subquery()
    count = select(func.count(Review.id)).where(*conditions).scalar_subquery()
    db.session.execute(
        update(Recipe)
        .values(rating=func.coalesce(mean, 0.0), review_count=count)
        .execution_options(synchronize_session=False)
    )

    author_count = (
        select(func.count(Recipe.id))
        .where(Recipe.author_id == Author.id)
        .scalar_subquery()
    )
    db.session.execute(
        update(Author)
        .values(recipe_count=author_count)
        .execution_options(synchronize_session=False)
    )

    db.session.expire_all()
    logger.info("Rebuilt all category, recipe and author aggregates")
