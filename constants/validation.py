"""
Validation Constants

Contains whitelist values for validating user input to prevent
injection attacks and ensure data integrity.
"""

# Valid recipe difficulty levels
VALID_DIFFICULTIES = ('easy', 'medium', 'hard')

# Valid recipe publication states
VALID_RECIPE_STATUSES = ('draft', 'published', 'archived')

# Valid review moderation states
VALID_REVIEW_STATUSES = ('pending', 'published', 'rejected')

# Review rating bounds (inclusive)
MIN_RATING = 1
MAX_RATING = 5

# Sortable columns exposed by the list endpoints
RECIPE_SORT_COLUMNS = ('created_at', 'updated_at', 'title', 'rating', 'total_time', 'prep_time')
REVIEW_SORT_COLUMNS = ('created_at', 'rating', 'helpful_count')
SORT_ORDERS = ('ASC', 'DESC')

# Recipe fields a write may set; derived fields are not in this list
RECIPE_WRITABLE_FIELDS = (
    'slug', 'title', 'description', 'ingredients', 'instructions',
    'prep_time', 'cook_time', 'total_time', 'servings', 'difficulty',
    'image_url', 'calories', 'protein', 'carbs', 'fat', 'fiber', 'sugar',
    'featured', 'status', 'meta_title', 'meta_description', 'tags', 'author_id',
)

CATEGORY_WRITABLE_FIELDS = (
    'slug', 'name', 'description', 'image_url', 'parent_id', 'sort_order',
    'featured', 'meta_title', 'meta_description',
)

# Maximum field lengths for security
MAX_LENGTHS = {
    'slug': 200,
    'category_slug': 100,
    'title': 200,
    'category_name': 200,
    'reviewer_name': 100,
    'reviewer_email': 200,
    'review_title': 200,
    'review_comment': 5000,
    'image_url': 500,
    'user_id': 100,
}
