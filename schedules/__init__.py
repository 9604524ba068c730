from flask import Blueprint

schedules_bp = Blueprint('schedules', __name__)

# Routes import the blueprint, so they are loaded after it exists
from . import routes  # noqa
