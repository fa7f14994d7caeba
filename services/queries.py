"""
Catalog Queries

Read side used by the JSON API. Only published recipes are listed to
visitors; aggregates are read straight from their denormalized columns.
"""

from sqlalchemy import select
from sqlalchemy.orm import joinedload, selectinload

from constants.validation import RECIPE_SORT_COLUMNS, REVIEW_SORT_COLUMNS, SORT_ORDERS
from models import db, Author, Category, Recipe, RecipeCategory, Review


def _ordering(column, order):
    return column.asc() if order == 'ASC' else column.desc()


def clean_sort(sort_by, sort_order, allowed, default='created_at'):
    """Whitelist a sort column and direction, falling back to defaults."""
    sort_by = sort_by if sort_by in allowed else default
    sort_order = (sort_order or 'DESC').upper()
    if sort_order not in SORT_ORDERS:
        sort_order = 'DESC'
    return sort_by, sort_order


def _in_category(slug):
    return Recipe.id.in_(
        select(RecipeCategory.recipe_id)
        .join(Category, Category.id == RecipeCategory.category_id)
        .where(Category.slug == slug)
    )


def list_recipes(category=None, featured=False, difficulty=None, max_time=None,
                 min_rating=None, sort_by='created_at', sort_order='DESC',
                 limit=20, offset=0):
    sort_by, sort_order = clean_sort(sort_by, sort_order, RECIPE_SORT_COLUMNS)

    stmt = (
        select(Recipe)
        .where(Recipe.status == 'published')
        .options(joinedload(Recipe.author))
    )
    if category:
        stmt = stmt.where(_in_category(category))
    if featured:
        stmt = stmt.where(Recipe.featured.is_(True))
    if difficulty:
        stmt = stmt.where(Recipe.difficulty == difficulty)
    if max_time is not None:
        stmt = stmt.where(Recipe.total_time <= max_time)
    if min_rating is not None:
        stmt = stmt.where(Recipe.rating >= min_rating)

    stmt = stmt.order_by(_ordering(getattr(Recipe, sort_by), sort_order), Recipe.id.desc())
    return list(db.session.scalars(stmt.limit(limit).offset(offset)).unique())


def get_published_recipe(slug):
    stmt = (
        select(Recipe)
        .where(Recipe.slug == slug, Recipe.status == 'published')
        .options(joinedload(Recipe.author), selectinload(Recipe.categories))
    )
    return db.session.scalar(stmt)


def get_recipe_by_slug(slug):
    """Any status; used where drafts must still resolve (review submission)."""
    return db.session.scalar(select(Recipe).where(Recipe.slug == slug))


def list_categories(featured=False, parent_id=None, roots_only=False, limit=50, offset=0):
    stmt = select(Category)
    if featured:
        stmt = stmt.where(Category.featured.is_(True))
    if parent_id is not None:
        stmt = stmt.where(Category.parent_id == parent_id)
    elif roots_only:
        stmt = stmt.where(Category.parent_id.is_(None))
    stmt = stmt.order_by(Category.sort_order.asc(), Category.name.asc())
    return list(db.session.scalars(stmt.limit(limit).offset(offset)))


def get_category(slug):
    return db.session.scalar(select(Category).where(Category.slug == slug))


def list_reviews(recipe_id, sort_by='created_at', sort_order='DESC', limit=10, offset=0):
    sort_by, sort_order = clean_sort(sort_by, sort_order, REVIEW_SORT_COLUMNS)
    stmt = (
        select(Review)
        .where(Review.recipe_id == recipe_id, Review.status == 'published')
        .order_by(_ordering(getattr(Review, sort_by), sort_order), Review.id.desc())
        .limit(limit)
        .offset(offset)
    )
    return list(db.session.scalars(stmt))


def list_authors():
    stmt = select(Author).order_by(Author.recipe_count.desc(), Author.name.asc())
    return list(db.session.scalars(stmt))


def author_recipes(author_id, limit=20):
    stmt = (
        select(Recipe)
        .where(Recipe.author_id == author_id, Recipe.status == 'published')
        .options(joinedload(Recipe.author))
        .order_by(Recipe.created_at.desc(), Recipe.id.desc())
        .limit(limit)
    )
    return list(db.session.scalars(stmt).unique())
