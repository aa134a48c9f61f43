# refurb_pricing/routes/common.py
import io
from typing import Any, Dict, List

import pandas as pd
from flask import jsonify, request

from refurb_pricing.actions.action_result import ActionResult
from refurb_pricing.actions.error_type import ErrorType
from refurb_pricing.logger import get_logger

logger = get_logger(__name__)

ALLOWED_EXTENSIONS = {'xlsx', 'xls', 'csv'}

STATUS_CODES = {
    ErrorType.INPUT_ERROR: 400,
    ErrorType.NOT_FOUND: 404,
    ErrorType.BUSINESS_RULE_ERROR: 409,
    ErrorType.DATABASE_ERROR: 500,
    ErrorType.SYSTEM_ERROR: 500,
}


def allowed_file(filename):
    """检查文件扩展名"""
    return '.' in filename and filename.rsplit('.', 1)[1].lower() in ALLOWED_EXTENSIONS


def respond(result: ActionResult, success_status: int = 200):
    """ActionResult -> (json, status)"""
    if result.ok:
        return jsonify(result.to_response()), success_status
    return jsonify(result.to_response()), STATUS_CODES.get(result.error_type, 500)


def bad_request(message: str):
    return jsonify({"success": False, "error": message, "error_type": ErrorType.INPUT_ERROR.value}), 400


def json_body() -> Dict[str, Any]:
    data = request.get_json(silent=True)
    return data if isinstance(data, dict) else {}


def load_rows() -> List[Dict[str, Any]]:
    '''
    读取批量上传的数据行

    - JSON body: {"rows": [...]}
    - multipart: file=.xlsx/.xls/.csv, first sheet, header row = column names

    Raises:
        ValueError: 没有文件 / 格式不支持 / 文件无法解析
    '''
    if request.is_json:
        rows = json_body().get("rows")
        if not isinstance(rows, list):
            raise ValueError("Request body must contain a 'rows' list")
        return [r for r in rows if isinstance(r, dict)]

    file = request.files.get('file')
    if file is None or not file.filename:
        raise ValueError("No file uploaded")
    if not allowed_file(file.filename):
        raise ValueError("Only .xlsx, .xls and .csv files are supported")

    content = file.read()
    try:
        if file.filename.lower().endswith('.csv'):
            df = pd.read_csv(io.BytesIO(content))
        else:
            df = pd.read_excel(io.BytesIO(content))
    except Exception as e:
        logger.warning(f"[upload] failed to parse {file.filename}: {e}")
        raise ValueError("Failed to parse uploaded file") from e

    logger.info(f"[upload] {file.filename} rows={len(df)} columns={list(df.columns)}")
    return df.to_dict(orient="records")


def request_ids() -> List[str]:
    ids = json_body().get("ids")
    if not isinstance(ids, list) or not ids:
        raise ValueError("Request body must contain a non-empty 'ids' list")
    return [str(i) for i in ids]
