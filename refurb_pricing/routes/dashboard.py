# refurb_pricing/routes/dashboard.py
from flask import Blueprint, request

from refurb_pricing.actions import master_actions as actions
from refurb_pricing.db.session import get_session
from refurb_pricing.routes.common import respond

dashboard_bp = Blueprint('dashboard', __name__, url_prefix='/dashboard')


@dashboard_bp.route('/', methods=['GET'])
def index():
    db = get_session()
    try:
        return respond(actions.dashboard_data_action(db))
    finally:
        db.close()


@dashboard_bp.route('/search', methods=['GET'])
def search():
    db = get_session()
    try:
        return respond(actions.global_search_action(db, request.args.get('q', '')))
    finally:
        db.close()
