# refurb_pricing/routes/price_calculator.py
from flask import Blueprint, request

from refurb_pricing.actions import price_calculator_actions as actions
from refurb_pricing.db.session import get_session
from refurb_pricing.routes.common import bad_request, json_body, load_rows, request_ids, respond

price_calculator_bp = Blueprint('price_calculator', __name__, url_prefix='/price-calculator')


@price_calculator_bp.route('/bulk-upload', methods=['POST'])
def bulk_upload():
    """上传表格，批量生成估价记录"""
    try:
        rows = load_rows()
    except ValueError as e:
        return bad_request(str(e))

    db = get_session()
    try:
        return respond(actions.bulk_upload_calculations_action(db, rows), 201)
    finally:
        db.close()


@price_calculator_bp.route('/lookup', methods=['GET'])
def lookup():
    db = get_session()
    try:
        return respond(actions.lookup_masters_action(db, request.args.get('productName')))
    finally:
        db.close()


@price_calculator_bp.route('/', methods=['GET'])
def list_calculations():
    db = get_session()
    try:
        return respond(actions.list_calculations_action(db))
    finally:
        db.close()


@price_calculator_bp.route('/', methods=['POST'])
def add_calculation():
    db = get_session()
    try:
        return respond(actions.add_calculation_action(db, json_body()), 201)
    finally:
        db.close()


@price_calculator_bp.route('/<calculation_id>', methods=['PUT'])
def update_calculation(calculation_id):
    db = get_session()
    try:
        return respond(actions.update_calculation_action(db, calculation_id, json_body()))
    finally:
        db.close()


@price_calculator_bp.route('/<calculation_id>', methods=['DELETE'])
def delete_calculation(calculation_id):
    db = get_session()
    try:
        return respond(actions.delete_calculation_action(db, calculation_id))
    finally:
        db.close()


@price_calculator_bp.route('/bulk-delete', methods=['POST'])
def bulk_delete():
    try:
        ids = request_ids()
    except ValueError as e:
        return bad_request(str(e))

    db = get_session()
    try:
        return respond(actions.bulk_delete_calculations_action(db, ids))
    finally:
        db.close()
