# refurb_pricing/routes/spare_parts.py
from flask import Blueprint

from refurb_pricing.actions import master_actions as actions
from refurb_pricing.db.session import get_session
from refurb_pricing.routes.common import bad_request, json_body, load_rows, request_ids, respond

spare_parts_bp = Blueprint('spare_parts', __name__, url_prefix='/spare-parts')


@spare_parts_bp.route('/', methods=['GET'])
def list_spare_parts():
    db = get_session()
    try:
        return respond(actions.list_spare_parts_action(db))
    finally:
        db.close()


@spare_parts_bp.route('/', methods=['POST'])
def add_spare_part():
    db = get_session()
    try:
        return respond(actions.add_spare_part_action(db, json_body()), 201)
    finally:
        db.close()


@spare_parts_bp.route('/<spare_part_id>', methods=['PUT'])
def update_spare_part(spare_part_id):
    db = get_session()
    try:
        return respond(actions.update_spare_part_action(db, spare_part_id, json_body()))
    finally:
        db.close()


@spare_parts_bp.route('/<spare_part_id>', methods=['DELETE'])
def delete_spare_part(spare_part_id):
    db = get_session()
    try:
        return respond(actions.delete_spare_part_action(db, spare_part_id))
    finally:
        db.close()


@spare_parts_bp.route('/bulk-upload', methods=['POST'])
def bulk_upload():
    """配件价格表批量导入"""
    try:
        rows = load_rows()
    except ValueError as e:
        return bad_request(str(e))

    db = get_session()
    try:
        return respond(actions.bulk_upload_spare_parts_action(db, rows), 201)
    finally:
        db.close()


@spare_parts_bp.route('/bulk-delete', methods=['POST'])
def bulk_delete():
    try:
        ids = request_ids()
    except ValueError as e:
        return bad_request(str(e))

    db = get_session()
    try:
        return respond(actions.bulk_delete_spare_parts_action(db, ids))
    finally:
        db.close()
