"""
Constants Package

Validation whitelists and seed data for the recipe catalog.
"""

from .validation import (
    VALID_DIFFICULTIES,
    VALID_RECIPE_STATUSES,
    VALID_REVIEW_STATUSES,
    MIN_RATING,
    MAX_RATING,
    RECIPE_SORT_COLUMNS,
    REVIEW_SORT_COLUMNS,
    SORT_ORDERS,
    RECIPE_WRITABLE_FIELDS,
    CATEGORY_WRITABLE_FIELDS,
    MAX_LENGTHS,
)

__all__ = [
    'VALID_DIFFICULTIES',
    'VALID_RECIPE_STATUSES',
    'VALID_REVIEW_STATUSES',
    'MIN_RATING',
    'MAX_RATING',
    'RECIPE_SORT_COLUMNS',
    'REVIEW_SORT_COLUMNS',
    'SORT_ORDERS',
    'RECIPE_WRITABLE_FIELDS',
    'CATEGORY_WRITABLE_FIELDS',
    'MAX_LENGTHS',
]
