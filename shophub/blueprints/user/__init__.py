from flask import Blueprint
from shophub.blueprints import register_blueprint

bp = Blueprint('user', __name__)

from . import routes  # noqa: E402,F401

register_blueprint(bp, url_prefix='/user')
