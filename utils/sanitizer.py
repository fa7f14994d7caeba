"""
Input Sanitization Module

Cleans text submitted by site visitors (reviews, favorites) and by editors
(recipe and category fields) before it is stored.
"""

import html
import re
import unicodedata
from urllib.parse import urlparse

CONTROL_CHARS = re.compile(r'[\x00-\x1f\x7f-\x9f]')


def sanitize_text(text, max_length=10000):
    """
    Sanitize text by HTML-escaping special characters.

    This prevents XSS by ensuring that any HTML/JS in the text
    is displayed as literal text rather than being executed.

    Args:
        text: The text to sanitize (can be None)
        max_length: Maximum allowed length (default 10000)

    Returns:
        Sanitized string, truncated if necessary
    """
    if text is None:
        return ''

    if not isinstance(text, str):
        text = str(text)

    # Strip leading/trailing whitespace
    text = text.strip()

    # Keep newlines and tabs, drop the other control characters
    text = re.sub(r'[\x00-\x08\x0b\x0c\x0e-\x1f\x7f-\x9f]', '', text)

    # HTML escape special characters
    text = html.escape(text)

    # Truncate if too long
    if len(text) > max_length:
        text = text[:max_length] + '...'

    return text


def sanitize_name(name, max_length=200):
    """
    Sanitize a single-line name (reviewer, recipe title, category name).

    Returns an empty string when nothing printable is left.
    """
    if not name:
        return ''

    if not isinstance(name, str):
        name = str(name)

    name = CONTROL_CHARS.sub('', name.strip())
    name = html.escape(name)

    # Collapse multiple spaces
    name = re.sub(r'\s+', ' ', name)

    if len(name) > max_length:
        name = name[:max_length - 3] + '...'

    return name


def sanitize_url(url):
    """
    Sanitize a URL by rejecting dangerous schemes.

    Site-relative paths ('/images/...') and http(s) URLs are allowed;
    javascript:, data:, vbscript: and friends are rejected.

    Returns:
        The URL if safe, empty string if unsafe or invalid
    """
    if not url or not isinstance(url, str):
        return ''

    url = url.strip()

    dangerous_schemes = {
        'javascript', 'data', 'vbscript', 'file',
        'blob', 'about', 'chrome', 'moz-extension'
    }

    try:
        parsed = urlparse(url)
    except ValueError:
        return ''

    scheme = parsed.scheme.lower()
    if scheme and scheme not in ('http', 'https'):
        return ''

    # Encoded or embedded schemes
    url_lower = url.lower()
    for dangerous in dangerous_schemes:
        if dangerous + ':' in url_lower or dangerous.replace('a', '%61') + ':' in url_lower:
            return ''

    return url


def slugify(value, max_length=200):
    """
    Turn a title into a URL slug: 'Lemon Cream Cheese Cake' -> 'lemon-cream-cheese-cake'.
    """
    if not value:
        return ''
    value = unicodedata.normalize('NFKD', str(value)).encode('ascii', 'ignore').decode('ascii')
    value = re.sub(r'[^\w\s-]', '', value.lower())
    value = re.sub(r'[\s_-]+', '-', value).strip('-')
    return value[:max_length].rstrip('-')


def is_valid_slug(value):
    return bool(value) and re.fullmatch(r'[a-z0-9]+(?:-[a-z0-9]+)*', value) is not None
