import click
from flask import Flask, jsonify, request
from flask_cors import CORS
from flask_migrate import Migrate
from werkzeug.exceptions import HTTPException

from config import get_config
from models import db, Author, Category
from services import (
    ConstraintViolation, MissingReference, MaintenanceError,
    create_recipe, update_recipe, delete_recipe,
    create_category, update_category, delete_category,
    add_recipe_to_category, remove_recipe_from_category,
    add_review, delete_review, set_review_status, review_statistics,
    add_favorite, remove_favorite, list_favorites,
    search_recipes, rebuild_all_aggregates, rebuild_search_index, seed_database,
)
from services import queries
from services.transaction import write_transaction
from utils.logger import setup_logging, get_logger

app = Flask(__name__)
app.config.from_object(get_config())

setup_logging(app.config['LOG_LEVEL'])
logger = get_logger(__name__)

CORS(app, resources={r"/api/*": {"origins": app.config.get('CORS_ORIGINS', '*')}})

db.init_app(app)
migrate = Migrate(app, db)


def safe_float(value, default=None, min_val=None, max_val=None):
    """Safely parse a float value with optional bounds."""
    try:
        result = float(value) if value else default
        if result is None:
            return None
        if min_val is not None:
            result = max(min_val, result)
        if max_val is not None:
            result = min(max_val, result)
        return result
    except (ValueError, TypeError):
        return default


def safe_int(value, default=1, min_val=None, max_val=None):
    """Safely parse an integer value with optional bounds."""
    try:
        result = int(value) if value else default
        if result is None:
            return None
        if min_val is not None:
            result = max(min_val, result)
        if max_val is not None:
            result = min(max_val, result)
        return result
    except (ValueError, TypeError):
        return default


def flag(name):
    return request.args.get(name, '').lower() == 'true'


def page_args(default_limit=None):
    if default_limit is None:
        default_limit = app.config['DEFAULT_PAGE_SIZE']
    limit = safe_int(request.args.get('limit'), default=default_limit, min_val=1,
                     max_val=app.config['MAX_PAGE_SIZE'])
    offset = safe_int(request.args.get('offset'), default=0, min_val=0)
    return limit, offset


def pagination(items, limit, offset):
    return {'limit': limit, 'offset': offset, 'hasMore': len(items) == limit}


def success(data=None, status=200, **extra):
    body = {'success': True}
    if data is not None:
        body['data'] = data
    body.update(extra)
    return jsonify(body), status


def failure(message, status):
    return jsonify({'success': False, 'error': message}), status


def json_body():
    body = request.get_json(silent=True)
    if not isinstance(body, dict):
        raise ConstraintViolation('Request body must be a JSON object')
    return body


# ============================================
# ERROR HANDLERS
# ============================================

@app.errorhandler(ConstraintViolation)
def handle_constraint_violation(e):
    return failure(str(e), 400)


@app.errorhandler(MissingReference)
def handle_missing_reference(e):
    return failure(str(e), 404)


@app.errorhandler(MaintenanceError)
def handle_maintenance_error(e):
    return failure('The change could not be saved', 500)


@app.errorhandler(HTTPException)
def handle_http_error(e):
    return failure(e.description or e.name, e.code)


@app.errorhandler(Exception)
def handle_unexpected_error(e):
    logger.exception("Unhandled error on %s %s", request.method, request.path)
    return failure('Internal server error', 500)


# ============================================
# ROUTES - CATEGORIES
# ============================================

@app.route('/api/categories')
def categories_list():
    limit, offset = page_args(default_limit=50)
    parent = request.args.get('parent_id')
    categories = queries.list_categories(
        featured=flag('featured'),
        parent_id=safe_int(parent, default=None) if parent and parent != 'null' else None,
        roots_only=parent == 'null',
        limit=limit,
        offset=offset,
    )
    data = [c.to_dict() for c in categories]
    return success(data, total=len(data), pagination=pagination(data, limit, offset))


@app.route('/api/categories/<slug>')
def category_view(slug):
    category = queries.get_category(slug)
    if category is None:
        return failure('Category not found', 404)
    return success(category.to_dict())


@app.route('/api/categories/<slug>/recipes')
def category_recipes(slug):
    if queries.get_category(slug) is None:
        return failure('Category not found', 404)
    limit, offset = page_args()
    recipes = queries.list_recipes(
        category=slug,
        sort_by=request.args.get('sort_by'),
        sort_order=request.args.get('sort_order'),
        limit=limit,
        offset=offset,
    )
    data = [r.to_summary() for r in recipes]
    return success(data, total=len(data), pagination=pagination(data, limit, offset))


@app.route('/api/categories', methods=['POST'])
def category_add():
    body = json_body()
    category = create_category(body.pop('name', None), slug=body.pop('slug', None), **body)
    return success(category.to_dict(), 201)


@app.route('/api/categories/<int:id>', methods=['PUT'])
def category_edit(id):
    category = update_category(id, **json_body())
    return success(category.to_dict())


@app.route('/api/categories/<int:id>', methods=['DELETE'])
def category_delete(id):
    delete_category(id)
    return success(message='Category deleted')


# ============================================
# ROUTES - RECIPES
# ============================================

@app.route('/api/recipes')
def recipes_list():
    limit, offset = page_args()
    recipes = queries.list_recipes(
        category=request.args.get('category'),
        featured=flag('featured'),
        difficulty=request.args.get('difficulty'),
        max_time=safe_int(request.args.get('max_time'), default=None),
        min_rating=safe_float(request.args.get('min_rating')),
        sort_by=request.args.get('sort_by'),
        sort_order=request.args.get('sort_order'),
        limit=limit,
        offset=offset,
    )
    data = [r.to_summary() for r in recipes]
    return success(data, total=len(data), pagination=pagination(data, limit, offset))


@app.route('/api/recipes/<slug>')
def recipe_view(slug):
    recipe = queries.get_published_recipe(slug)
    if recipe is None:
        return failure('Recipe not found', 404)
    return success(recipe.to_dict())


@app.route('/api/recipes', methods=['POST'])
def recipe_add():
    body = json_body()
    recipe = create_recipe(
        body.pop('title', None),
        body.pop('ingredients', None),
        body.pop('instructions', None),
        slug=body.pop('slug', None),
        **body
    )
    return success(recipe.to_dict(), 201)


@app.route('/api/recipes/<int:id>', methods=['PUT'])
def recipe_edit(id):
    recipe = update_recipe(id, **json_body())
    return success(recipe.to_dict())


@app.route('/api/recipes/<int:id>', methods=['DELETE'])
def recipe_delete(id):
    delete_recipe(id)
    return success(message='Recipe deleted')


@app.route('/api/recipes/<int:recipe_id>/categories/<int:category_id>', methods=['POST'])
def recipe_category_add(recipe_id, category_id):
    add_recipe_to_category(recipe_id, category_id)
    return success(db.session.get(Category, category_id).to_dict(), 201)


@app.route('/api/recipes/<int:recipe_id>/categories/<int:category_id>', methods=['DELETE'])
def recipe_category_delete(recipe_id, category_id):
    remove_recipe_from_category(recipe_id, category_id)
    return success(db.session.get(Category, category_id).to_dict())


# ============================================
# ROUTES - SEARCH
# ============================================

@app.route('/api/search')
def search():
    query = request.args.get('q', '')
    if not query.strip():
        return failure('Search query is required', 400)

    limit, offset = page_args()
    recipes = search_recipes(
        query,
        category=request.args.get('category'),
        difficulty=request.args.get('difficulty'),
        max_time=safe_int(request.args.get('max_time'), default=None),
        limit=limit,
        offset=offset,
    )
    data = [r.to_summary() for r in recipes]
    return success(data, query=query, total=len(data), pagination=pagination(data, limit, offset))


# ============================================
# ROUTES - REVIEWS
# ============================================

@app.route('/api/recipes/<slug>/reviews')
def recipe_reviews(slug):
    recipe = queries.get_recipe_by_slug(slug)
    if recipe is None:
        return failure('Recipe not found', 404)

    limit, offset = page_args(default_limit=10)
    reviews = queries.list_reviews(
        recipe.id,
        sort_by=request.args.get('sort_by'),
        sort_order=request.args.get('sort_order'),
        limit=limit,
        offset=offset,
    )
    data = [r.to_dict() for r in reviews]
    return success(
        data,
        statistics=review_statistics(recipe.id),
        pagination=pagination(data, limit, offset),
    )


@app.route('/api/recipes/<slug>/reviews', methods=['POST'])
def recipe_review_add(slug):
    body = json_body()
    recipe = queries.get_recipe_by_slug(slug)
    if recipe is None:
        return failure('Recipe not found', 404)

    review = add_review(
        recipe.id,
        body.get('reviewer_name'),
        body.get('rating'),
        reviewer_email=body.get('reviewer_email'),
        title=body.get('title'),
        comment=body.get('comment'),
    )
    return success(message='Review added successfully', id=review.id, status=201)


@app.route('/api/reviews/<int:id>', methods=['DELETE'])
def review_delete(id):
    delete_review(id)
    return success(message='Review deleted')


@app.route('/api/reviews/<int:id>/status', methods=['PUT'])
def review_status(id):
    review = set_review_status(id, json_body().get('status'))
    return success({'id': review.id, 'status': review.status})


# ============================================
# ROUTES - AUTHORS
# ============================================

@app.route('/api/authors')
def authors_list():
    return success([a.to_dict() for a in queries.list_authors()])


@app.route('/api/authors/<int:id>')
def author_view(id):
    author = db.session.get(Author, id)
    if author is None:
        return failure('Author not found', 404)
    data = author.to_dict()
    data['recipes'] = [r.to_summary() for r in queries.author_recipes(id)]
    return success(data)


# ============================================
# ROUTES - FAVORITES
# ============================================

@app.route('/api/favorites/<user_id>')
def favorites_list(user_id):
    return success([f.to_dict() for f in list_favorites(user_id)])


@app.route('/api/favorites/<user_id>/<int:recipe_id>', methods=['POST'])
def favorite_add(user_id, recipe_id):
    add_favorite(user_id, recipe_id)
    return success(message='Added to favorites', status=201)


@app.route('/api/favorites/<user_id>/<int:recipe_id>', methods=['DELETE'])
def favorite_delete(user_id, recipe_id):
    remove_favorite(user_id, recipe_id)
    return success(message='Removed from favorites')


# ============================================
# INITIALIZE DATABASE
# ============================================

def init_db(seed=False):
    with app.app_context():
        db.create_all()
        if seed:
            seed_database()


@app.cli.command('init-db')
@click.option('--seed', is_flag=True, help='Load the sample catalog into an empty database.')
def init_db_command(seed):
    """Create all tables, optionally seeding sample data."""
    db.create_all()
    if seed:
        seeded = seed_database()
        click.echo('Seeded sample catalog.' if seeded else 'Catalog not empty, seed skipped.')
    click.echo('Database ready.')


@app.cli.command('rebuild-index')
def rebuild_index_command():
    """Recount every aggregate and rebuild the search index."""
    with write_transaction('rebuild aggregates and search index'):
        rebuild_all_aggregates()
        count = rebuild_search_index()
    click.echo(f'Rebuilt aggregates and {count} search entries.')


if __name__ == '__main__':
    init_db(seed=True)
    # host='0.0.0.0' allows access from other devices on the network
    app.run(debug=app.config.get('DEBUG', False), host='0.0.0.0', port=5000, use_reloader=False)
