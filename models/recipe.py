"""
Recipe Models

Contains the Recipe and RecipeCategory models. Ingredients, instructions and
tags are stored as JSON text; the stored text is what the search index
concatenates, so it is kept exactly as written.
"""

import json

from constants.validation import VALID_DIFFICULTIES, VALID_RECIPE_STATUSES
from .base import db, utcnow, isoformat, in_list


def _load_json(text, default):
    if not text:
        return default
    try:
        return json.loads(text)
    except (ValueError, TypeError):
        return default


class Recipe(db.Model):
    """Recipe content plus denormalized rating/review_count."""
    __tablename__ = 'recipes'
    __table_args__ = (
        db.CheckConstraint(
            in_list('difficulty', VALID_DIFFICULTIES), name='ck_recipes_difficulty'
        ),
        db.CheckConstraint(
            in_list('status', VALID_RECIPE_STATUSES), name='ck_recipes_status'
        ),
    )

    id = db.Column(db.Integer, primary_key=True)
    slug = db.Column(db.String(200), unique=True, nullable=False, index=True)
    title = db.Column(db.String(200), nullable=False)
    description = db.Column(db.Text)
    ingredients = db.Column(db.Text, nullable=False)  # JSON list of {item, amount, unit, notes}
    instructions = db.Column(db.Text, nullable=False)  # JSON list of {step, instruction}
    prep_time = db.Column(db.Integer)  # minutes
    cook_time = db.Column(db.Integer)
    total_time = db.Column(db.Integer)
    servings = db.Column(db.Integer)
    difficulty = db.Column(db.String(10))
    image_url = db.Column(db.String(500))

    # Maintained by services.aggregates
    rating = db.Column(db.Float, default=0.0, nullable=False, index=True)
    review_count = db.Column(db.Integer, default=0, nullable=False)

    # Nutrition per serving
    calories = db.Column(db.Integer)
    protein = db.Column(db.Float)
    carbs = db.Column(db.Float)
    fat = db.Column(db.Float)
    fiber = db.Column(db.Float)
    sugar = db.Column(db.Float)

    featured = db.Column(db.Boolean, default=False, nullable=False, index=True)
    status = db.Column(db.String(10), default='published', nullable=False, index=True)
    meta_title = db.Column(db.String(200))
    meta_description = db.Column(db.Text)
    tags = db.Column(db.Text)  # JSON list of strings
    author_id = db.Column(db.Integer, db.ForeignKey('authors.id', ondelete='SET NULL'), nullable=True, index=True)
    created_at = db.Column(db.DateTime, default=utcnow, nullable=False, index=True)
    updated_at = db.Column(db.DateTime, default=utcnow, nullable=False)

    author = db.relationship('Author', back_populates='recipes')
    category_links = db.relationship(
        'RecipeCategory', back_populates='recipe',
        cascade='all, delete-orphan', passive_deletes=True
    )
    categories = db.relationship(
        'Category', secondary='recipe_categories', viewonly=True,
        order_by='Category.sort_order'
    )
    reviews = db.relationship(
        'Review', back_populates='recipe',
        cascade='all, delete-orphan', passive_deletes=True
    )
    search_entries = db.relationship(
        'RecipeSearchIndex', back_populates='recipe',
        cascade='all, delete-orphan', passive_deletes=True
    )
    favorites = db.relationship(
        'UserFavorite', back_populates='recipe',
        cascade='all, delete-orphan', passive_deletes=True
    )

    @property
    def ingredient_list(self):
        return _load_json(self.ingredients, [])

    @property
    def instruction_list(self):
        return _load_json(self.instructions, [])

    @property
    def tag_list(self):
        return _load_json(self.tags, [])

    def to_summary(self):
        """Card-sized representation used by list and search endpoints."""
        return {
            'id': self.id,
            'slug': self.slug,
            'title': self.title,
            'description': self.description,
            'prep_time': self.prep_time,
            'cook_time': self.cook_time,
            'total_time': self.total_time,
            'servings': self.servings,
            'difficulty': self.difficulty,
            'image_url': self.image_url,
            'rating': self.rating,
            'review_count': self.review_count,
            'calories': self.calories,
            'featured': bool(self.featured),
            'tags': self.tag_list,
            'created_at': isoformat(self.created_at),
            'updated_at': isoformat(self.updated_at),
            'author_name': self.author.name if self.author else None,
            'author_avatar': self.author.avatar_url if self.author else None,
        }

    def to_dict(self):
        data = self.to_summary()
        data.update({
            'ingredients': self.ingredient_list,
            'instructions': self.instruction_list,
            'protein': self.protein,
            'carbs': self.carbs,
            'fat': self.fat,
            'fiber': self.fiber,
            'sugar': self.sugar,
            'status': self.status,
            'meta_title': self.meta_title,
            'meta_description': self.meta_description,
            'author_id': self.author_id,
            'author_bio': self.author.bio if self.author else None,
            'author_social': self.author.social_link_map if self.author else {},
            'categories': [c.to_summary() for c in self.categories],
        })
        return data


class RecipeCategory(db.Model):
    """Join table linking recipes to categories."""
    __tablename__ = 'recipe_categories'
    __table_args__ = (
        db.UniqueConstraint('recipe_id', 'category_id', name='uq_recipe_category'),
    )

    id = db.Column(db.Integer, primary_key=True)
    recipe_id = db.Column(db.Integer, db.ForeignKey('recipes.id', ondelete='CASCADE'), nullable=False, index=True)
    category_id = db.Column(db.Integer, db.ForeignKey('categories.id', ondelete='CASCADE'), nullable=False, index=True)
    created_at = db.Column(db.DateTime, default=utcnow, nullable=False)

    recipe = db.relationship('Recipe', back_populates='category_links')
    category = db.relationship('Category', back_populates='recipe_links')
