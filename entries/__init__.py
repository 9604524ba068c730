from flask import Blueprint

entries_bp = Blueprint('entries', __name__)

# Routes import the blueprint, so they are loaded after it exists
from . import routes  # noqa
