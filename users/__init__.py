from flask import Blueprint

users_bp = Blueprint('users', __name__)

# Routes import the blueprint, so they are loaded after it exists
from . import routes  # noqa
