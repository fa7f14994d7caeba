"""
Services Package

Write path, maintenance hooks and read queries for the recipe catalog.
"""

from .errors import (
    CatalogError,
    ConstraintViolation,
    MissingReference,
    MaintenanceError,
)

from .aggregates import (
    refresh_category_recipe_count,
    refresh_recipe_rating,
    refresh_author_recipe_count,
    rebuild_all_aggregates,
)

from .search_index import (
    build_search_text,
    rebuild_search_entry,
    rebuild_search_index,
    get_search_text,
    search_recipes,
)

from .timestamps import touch

from .catalog import (
    create_recipe,
    update_recipe,
    delete_recipe,
    create_category,
    update_category,
    delete_category,
    add_recipe_to_category,
    remove_recipe_from_category,
)

from .reviews import (
    add_review,
    delete_review,
    set_review_status,
    review_statistics,
)

from .favorites import (
    add_favorite,
    remove_favorite,
    list_favorites,
)

from .seed import seed_database

__all__ = [
    # Errors
    'CatalogError',
    'ConstraintViolation',
    'MissingReference',
    'MaintenanceError',
    # Aggregates
    'refresh_category_recipe_count',
    'refresh_recipe_rating',
    'refresh_author_recipe_count',
    'rebuild_all_aggregates',
    # Search index
    'build_search_text',
    'rebuild_search_entry',
    'rebuild_search_index',
    'get_search_text',
    'search_recipes',
    # Timestamps
    'touch',
    # Catalog writes
    'create_recipe',
    'update_recipe',
    'delete_recipe',
    'create_category',
    'update_category',
    'delete_category',
    'add_recipe_to_category',
    'remove_recipe_from_category',
    # Reviews
    'add_review',
    'delete_review',
    'set_review_status',
    'review_statistics',
    # Favorites
    'add_favorite',
    'remove_favorite',
    'list_favorites',
    # Seeding
    'seed_database',
]
