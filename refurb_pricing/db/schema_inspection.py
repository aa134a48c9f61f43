# refurb_pricing/db/schema_inspection.py
"""
Schema capability checks.

Some optional columns are rolled out incrementally; callers ask here whether
the destination table already has them instead of failing a whole batch.
"""
from typing import Iterable
from sqlalchemy import inspect
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from refurb_pricing.logger import get_logger

logger = get_logger(__name__)


def table_has_columns(db: Session, table_name: str, columns: Iterable[str]) -> bool:
    '''
    检查表中是否已存在全部指定列

    :param db: 当前数据库会话
    :type db: Session
    :param table_name: 表名
    :type table_name: str
    :param columns: 需要检查的列名
    :return: 全部存在返回True；表不存在或检查失败返回False
    :rtype: bool
    '''
    try:
        inspector = inspect(db.get_bind())
        if not inspector.has_table(table_name):
            return False
        existing = {c["name"] for c in inspector.get_columns(table_name)}
    except SQLAlchemyError as e:
        logger.warning(f"Column check failed for {table_name}, treating as absent: {e}")
        return False

    return all(c in existing for c in columns)
