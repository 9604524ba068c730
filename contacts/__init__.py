from flask import Blueprint

contacts_bp = Blueprint('contacts', __name__)

# Routes import the blueprint, so they are loaded after it exists
from . import routes  # noqa
