"""
WSGI entry point.

Point the host's WSGI config (gunicorn, PythonAnywhere, ...) at
wsgi:application.
"""

import os
import sys

os.environ.setdefault('FLASK_ENV', 'production')

# Add the project directory to the sys.path
project_home = os.path.dirname(os.path.abspath(__file__))
if project_home not in sys.path:
    sys.path.insert(0, project_home)

from app import app as application, init_db

# Tables only; seed explicitly with `flask --app app init-db --seed`
init_db()
