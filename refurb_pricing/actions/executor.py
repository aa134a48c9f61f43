# refurb_pricing/actions/executor.py
from typing import Any, Callable, Dict, Tuple
from pydantic import ValidationError
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from refurb_pricing.actions.action_result import ActionResult
from refurb_pricing.actions.error_type import ErrorType
from refurb_pricing.exceptions import NoValidRowsError, RecordNotFoundError
from refurb_pricing.logger import get_logger

logger = get_logger(__name__)

Classifier = Callable[[Exception], Tuple[ErrorType, str]]


def classify_common_error(e: Exception, fallback_message: str) -> Tuple[ErrorType, str]:
    """
    通用异常分类：输入类异常透传 service 的信息；
    数据库/系统异常只返回 fallback_message，不暴露内部细节。
    """
    # --- 输入类 ---
    if isinstance(e, NoValidRowsError):
        return ErrorType.INPUT_ERROR, str(e)
    if isinstance(e, RecordNotFoundError):
        return ErrorType.NOT_FOUND, str(e)
    if isinstance(e, ValidationError):
        first = e.errors()[0]
        field = ".".join(str(p) for p in first.get("loc", ())) or "input"
        return ErrorType.INPUT_ERROR, f"{field}: {first.get('msg')}"
    if isinstance(e, ValueError):
        return ErrorType.INPUT_ERROR, str(e)

    # --- DB 类 ---
    if isinstance(e, SQLAlchemyError):
        return ErrorType.DATABASE_ERROR, fallback_message

    # 兜底：未知异常
    return ErrorType.SYSTEM_ERROR, fallback_message


def execute_action(
    db: Session,
    func: Callable[[], Any],
    *,
    classify: Classifier,
    action_name: str,
    side_effect: bool = False,
) -> ActionResult:
    '''
    Run one unit of work against db and wrap the outcome.

    steps:
    1) call func (services only flush, never commit)
    2) commit when side_effect, return ActionResult.success(data)
    3) on any exception: rollback, log, classify, return ActionResult.failure

    :param db: request-scoped session
    :param func: zero-argument callable returning the result data
    :param classify: maps the raised exception to (ErrorType, message)
    :param action_name: used in log lines
    :param side_effect: whether func writes; writes are committed here
    '''
    try:
        data = func()
        if side_effect:
            db.commit()
        return ActionResult.success(data, side_effect=side_effect)
    except Exception as e:
        db.rollback()
        error_type, message = classify(e)
        if error_type in (ErrorType.DATABASE_ERROR, ErrorType.SYSTEM_ERROR):
            logger.exception(f"[{action_name}] failed")
        else:
            logger.info(f"[{action_name}] rejected: {message}")
        return ActionResult.failure(error_type, message)


def dump(model) -> Dict[str, Any]:
    return model.model_dump(mode="json")
