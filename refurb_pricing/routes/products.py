# refurb_pricing/routes/products.py
from flask import Blueprint

from refurb_pricing.actions import master_actions as actions
from refurb_pricing.db.session import get_session
from refurb_pricing.routes.common import bad_request, json_body, load_rows, request_ids, respond

products_bp = Blueprint('products', __name__, url_prefix='/products')


@products_bp.route('/', methods=['GET'])
def list_products():
    db = get_session()
    try:
        return respond(actions.list_products_action(db))
    finally:
        db.close()


@products_bp.route('/', methods=['POST'])
def add_product():
    db = get_session()
    try:
        return respond(actions.add_product_action(db, json_body()), 201)
    finally:
        db.close()


@products_bp.route('/<product_id>', methods=['PUT'])
def update_product(product_id):
    db = get_session()
    try:
        return respond(actions.update_product_action(db, product_id, json_body()))
    finally:
        db.close()


@products_bp.route('/<product_id>/price', methods=['PATCH'])
def update_price(product_id):
    """只改售价"""
    db = get_session()
    try:
        return respond(actions.update_product_price_action(db, product_id, json_body().get('sale_price')))
    finally:
        db.close()


@products_bp.route('/<product_id>', methods=['DELETE'])
def delete_product(product_id):
    db = get_session()
    try:
        return respond(actions.delete_product_action(db, product_id))
    finally:
        db.close()


@products_bp.route('/bulk-upload', methods=['POST'])
def bulk_upload():
    try:
        rows = load_rows()
    except ValueError as e:
        return bad_request(str(e))

    db = get_session()
    try:
        return respond(actions.bulk_upload_products_action(db, rows), 201)
    finally:
        db.close()


@products_bp.route('/bulk-delete', methods=['POST'])
def bulk_delete():
    try:
        ids = request_ids()
    except ValueError as e:
        return bad_request(str(e))

    db = get_session()
    try:
        return respond(actions.bulk_delete_products_action(db, ids))
    finally:
        db.close()


@products_bp.route('/stats', methods=['GET'])
def stats():
    db = get_session()
    try:
        return respond(actions.product_stats_action(db))
    finally:
        db.close()
