"""
Models Package

Exports all database models and the db instance for use throughout the application.
"""

from .base import db

from .author import Author
from .category import Category
from .recipe import Recipe, RecipeCategory
from .review import Review
from .search_index import RecipeSearchIndex
from .favorite import UserFavorite

__all__ = [
    'db',
    'Author',
    'Category',
    'Recipe',
    'RecipeCategory',
    'Review',
    'RecipeSearchIndex',
    'UserFavorite',
]
