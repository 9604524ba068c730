from flask import Blueprint

categories_bp = Blueprint('categories', __name__)

# Routes import the blueprint, so they are loaded after it exists
from . import routes  # noqa
