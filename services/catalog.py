"""
Catalog Write Path

Create/update/delete for recipes and categories, and linking recipes to
categories. Each operation runs in one write_transaction() and calls the
maintenance it owes before the commit:

- recipe create   -> search entry built, author recount
- recipe update   -> updated_at stamped, search entry rebuilt, author recounts
- recipe delete   -> recount of every linked category and the author
- category update -> updated_at stamped
- link add/remove -> category recount
"""

import json

from sqlalchemy import select

from constants.validation import (
    VALID_DIFFICULTIES, VALID_RECIPE_STATUSES,
    RECIPE_WRITABLE_FIELDS, CATEGORY_WRITABLE_FIELDS, MAX_LENGTHS,
)
from models import db, Author, Category, Recipe, RecipeCategory
from utils.logger import get_logger
from utils.sanitizer import sanitize_url, slugify, is_valid_slug
from .aggregates import refresh_author_recipe_count, refresh_category_recipe_count
from .errors import ConstraintViolation, MissingReference
from .search_index import rebuild_search_entry
from .timestamps import touch
from .transaction import write_transaction

logger = get_logger(__name__)

# Derived or engine-owned columns; silently dropped from caller input
IGNORED_FIELDS = {'id', 'rating', 'review_count', 'recipe_count', 'created_at', 'updated_at'}

INT_FIELDS = {'prep_time', 'cook_time', 'total_time', 'servings', 'calories', 'author_id', 'sort_order', 'parent_id'}
FLOAT_FIELDS = {'protein', 'carbs', 'fat', 'fiber', 'sugar'}
BOOL_FIELDS = {'featured'}


# ============================================
# INPUT NORMALIZATION
# ============================================

def _filter_fields(fields, writable, entity):
    unknown = set(fields) - set(writable) - IGNORED_FIELDS
    if unknown:
        raise ConstraintViolation(f"Unknown {entity} field(s): {', '.join(sorted(unknown))}")
    dropped = set(fields) & IGNORED_FIELDS
    if dropped:
        logger.debug("Ignoring derived %s field(s): %s", entity, ', '.join(sorted(dropped)))
    return {k: v for k, v in fields.items() if k in writable}


def _coerce_number(field, value):
    if value is None or value == '':
        return None
    try:
        if field in INT_FIELDS:
            if isinstance(value, bool):
                raise ValueError
            return int(value)
        return float(value)
    except (TypeError, ValueError):
        raise ConstraintViolation(f"{field} must be a number") from None


def _encode_ingredients(value):
    if isinstance(value, str):
        return value
    if not isinstance(value, (list, tuple)):
        raise ConstraintViolation("ingredients must be a list")
    items = []
    for entry in value:
        if isinstance(entry, str):
            entry = {'item': entry}
        if not isinstance(entry, dict) or not entry.get('item'):
            raise ConstraintViolation("each ingredient needs an 'item'")
        items.append({k: entry[k] for k in ('item', 'amount', 'unit', 'notes') if entry.get(k) is not None})
    return json.dumps(items)


def _encode_instructions(value):
    if isinstance(value, str):
        return value
    if not isinstance(value, (list, tuple)):
        raise ConstraintViolation("instructions must be a list")
    steps = []
    for number, entry in enumerate(value, start=1):
        if isinstance(entry, str):
            entry = {'step': number, 'instruction': entry}
        if not isinstance(entry, dict) or not entry.get('instruction'):
            raise ConstraintViolation("each instruction needs an 'instruction' text")
        steps.append({'step': entry.get('step', number), 'instruction': entry['instruction']})
    return json.dumps(steps)


def _encode_tags(value):
    if value is None:
        return json.dumps([])
    if isinstance(value, str):
        return value
    if not isinstance(value, (list, tuple, set)):
        raise ConstraintViolation("tags must be a list of strings")
    tags = []
    for tag in value:
        tag = str(tag).strip()
        if tag and tag not in tags:
            tags.append(tag)
    return json.dumps(tags)


def _normalize_slug(slug, fallback, max_length=MAX_LENGTHS['slug']):
    slug = (slug or '').strip() or slugify(fallback, max_length)
    if not is_valid_slug(slug) or len(slug) > max_length:
        raise ConstraintViolation(f"Invalid slug: {slug!r}")
    return slug


def normalize_recipe_fields(values):
    clean = {}
    for field, value in values.items():
        if field == 'ingredients':
            value = _encode_ingredients(value)
        elif field == 'instructions':
            value = _encode_instructions(value)
        elif field == 'tags':
            value = _encode_tags(value)
        elif field == 'difficulty':
            if value is not None:
                value = str(value).lower()
                if value not in VALID_DIFFICULTIES:
                    raise ConstraintViolation(f"difficulty must be one of {', '.join(VALID_DIFFICULTIES)}")
        elif field == 'status':
            if value not in VALID_RECIPE_STATUSES:
                raise ConstraintViolation(f"status must be one of {', '.join(VALID_RECIPE_STATUSES)}")
        elif field == 'title':
            value = (value or '').strip()
            if not value:
                raise ConstraintViolation("Recipe title is required")
            if len(value) > MAX_LENGTHS['title']:
                raise ConstraintViolation("Recipe title is too long")
        elif field == 'image_url':
            value = sanitize_url(value) or None
        elif field in INT_FIELDS or field in FLOAT_FIELDS:
            value = _coerce_number(field, value)
        elif field in BOOL_FIELDS:
            value = bool(value)
        clean[field] = value
    return clean


def _require(model, ident, label):
    obj = db.session.get(model, ident) if ident is not None else None
    if obj is None:
        raise MissingReference(f"{label} {ident} not found")
    return obj


# ============================================
# RECIPES
# ============================================

def create_recipe(title, ingredients, instructions, /, slug=None, **fields):
    """Insert a recipe and build its search entry."""
    values = _filter_fields(fields, RECIPE_WRITABLE_FIELDS, 'recipe')
    values.update(title=title, ingredients=ingredients, instructions=instructions)
    values.setdefault('tags', None)
    values = normalize_recipe_fields(values)
    values['slug'] = _normalize_slug(slug, values['title'])

    with write_transaction(f"create recipe {values['slug']!r}") as session:
        if values.get('author_id') is not None:
            _require(Author, values['author_id'], 'Author')

        recipe = Recipe(**values)
        session.add(recipe)
        session.flush()

        rebuild_search_entry(recipe)
        refresh_author_recipe_count(recipe.author_id)
    return recipe


def update_recipe(recipe_id, /, **fields):
    """
    Apply field changes to a recipe.

    updated_at is always restamped and the search entry rebuilt, even when
    no content actually changed.
    """
    values = _filter_fields(fields, RECIPE_WRITABLE_FIELDS, 'recipe')
    values = normalize_recipe_fields(values)
    if 'slug' in values:
        values['slug'] = _normalize_slug(values['slug'], values.get('title'))

    with write_transaction(f"update recipe {recipe_id}") as session:
        recipe = _require(Recipe, recipe_id, 'Recipe')
        old_author_id = recipe.author_id
        if values.get('author_id') is not None:
            _require(Author, values['author_id'], 'Author')

        for field, value in values.items():
            setattr(recipe, field, value)
        touch(recipe)
        session.flush()

        rebuild_search_entry(recipe)
        if recipe.author_id != old_author_id:
            refresh_author_recipe_count(old_author_id)
            refresh_author_recipe_count(recipe.author_id)
    return recipe


def delete_recipe(recipe_id):
    """Delete a recipe; its links, reviews, favorites and search rows cascade."""
    with write_transaction(f"delete recipe {recipe_id}") as session:
        recipe = _require(Recipe, recipe_id, 'Recipe')
        category_ids = sorted({link.category_id for link in recipe.category_links})
        author_id = recipe.author_id

        session.delete(recipe)
        session.flush()

        for category_id in category_ids:
            refresh_category_recipe_count(category_id)
        refresh_author_recipe_count(author_id)


# ============================================
# CATEGORIES
# ============================================

def _check_parent(category_id, parent_id):
    """Parent must exist and must not be the category or one of its descendants."""
    if parent_id is None:
        return
    parent = _require(Category, parent_id, 'Parent category')
    seen = set()
    node = parent
    while node is not None:
        if category_id is not None and node.id == category_id:
            raise ConstraintViolation(f"Category {category_id} cannot be its own ancestor")
        if node.id in seen:
            # Pre-existing loop above us; refuse to extend it
            raise ConstraintViolation(f"Category hierarchy above {parent_id} contains a cycle")
        seen.add(node.id)
        node = node.parent


def _normalize_category_fields(values):
    clean = {}
    for field, value in values.items():
        if field == 'name':
            value = (value or '').strip()
            if not value:
                raise ConstraintViolation("Category name is required")
            if len(value) > MAX_LENGTHS['category_name']:
                raise ConstraintViolation("Category name is too long")
        elif field == 'image_url':
            value = sanitize_url(value) or None
        elif field in INT_FIELDS:
            value = _coerce_number(field, value)
            if field == 'sort_order' and value is None:
                value = 0
        elif field in BOOL_FIELDS:
            value = bool(value)
        clean[field] = value
    return clean


def create_category(name, /, slug=None, **fields):
    values = _filter_fields(fields, CATEGORY_WRITABLE_FIELDS, 'category')
    values['name'] = name
    values = _normalize_category_fields(values)
    values['slug'] = _normalize_slug(slug, values['name'], MAX_LENGTHS['category_slug'])

    with write_transaction(f"create category {values['slug']!r}") as session:
        _check_parent(None, values.get('parent_id'))
        category = Category(**values)
        session.add(category)
        session.flush()
    return category


def update_category(category_id, /, **fields):
    values = _filter_fields(fields, CATEGORY_WRITABLE_FIELDS, 'category')
    values = _normalize_category_fields(values)
    if 'slug' in values:
        values['slug'] = _normalize_slug(values['slug'], values.get('name'), MAX_LENGTHS['category_slug'])

    with write_transaction(f"update category {category_id}") as session:
        category = _require(Category, category_id, 'Category')
        if 'parent_id' in values:
            _check_parent(category.id, values['parent_id'])

        for field, value in values.items():
            setattr(category, field, value)
        touch(category)
        session.flush()
    return category


def delete_category(category_id):
    """
    Delete a category. Its recipe links cascade; the recipes stay.

    Refused while sub-categories still point at it.
    """
    with write_transaction(f"delete category {category_id}") as session:
        category = _require(Category, category_id, 'Category')
        has_children = session.scalar(
            select(Category.id).where(Category.parent_id == category_id).limit(1)
        )
        if has_children is not None:
            raise ConstraintViolation(f"Category {category_id} still has sub-categories")

        session.delete(category)
        session.flush()


# ============================================
# RECIPE <-> CATEGORY LINKS
# ============================================

def add_recipe_to_category(recipe_id, category_id):
    with write_transaction(f"link recipe {recipe_id} to category {category_id}") as session:
        _require(Recipe, recipe_id, 'Recipe')
        _require(Category, category_id, 'Category')

        existing = session.scalar(
            select(RecipeCategory).where(
                RecipeCategory.recipe_id == recipe_id,
                RecipeCategory.category_id == category_id,
            )
        )
        if existing is not None:
            raise ConstraintViolation(f"Recipe {recipe_id} is already in category {category_id}")

        link = RecipeCategory(recipe_id=recipe_id, category_id=category_id)
        session.add(link)
        session.flush()

        refresh_category_recipe_count(category_id)
    return link


def remove_recipe_from_category(recipe_id, category_id):
    with write_transaction(f"unlink recipe {recipe_id} from category {category_id}") as session:
        link = session.scalar(
            select(RecipeCategory).where(
                RecipeCategory.recipe_id == recipe_id,
                RecipeCategory.category_id == category_id,
            )
        )
        if link is None:
            raise MissingReference(f"Recipe {recipe_id} is not in category {category_id}")

        session.delete(link)
        session.flush()

        refresh_category_recipe_count(category_id)
