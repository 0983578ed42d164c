from flask import Blueprint
from shophub.blueprints import register_blueprint

bp = Blueprint('main', __name__)

from . import routes  # noqa: E402,F401

register_blueprint(bp)
