# Utility modules for the recipe catalog
from .logger import setup_logging, get_logger
from .sanitizer import (
    sanitize_text, sanitize_name, sanitize_url, slugify, is_valid_slug
)
