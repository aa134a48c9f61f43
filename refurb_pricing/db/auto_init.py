"""
数据库自动初始化检查模块
在应用启动时检查表是否存在，缺失则创建
"""
from sqlalchemy import inspect
from refurb_pricing.db.session import get_engine
from refurb_pricing.db.init_db import init_db
from refurb_pricing.logger import get_logger

logger = get_logger(__name__)

REQUIRED_TABLES = ("products", "spare_parts", "price_calculations")


def check_tables_exist() -> bool:
    """检查数据库表是否存在"""
    try:
        inspector = inspect(get_engine())
        tables = set(inspector.get_table_names())
        return all(t in tables for t in REQUIRED_TABLES)
    except Exception as e:
        logger.warning(f"Table check failed: {e}")
        return False


def auto_init():
    """
    自动初始化检查
    如果数据库未初始化，自动建表
    """
    logger.info("Checking database initialization state...")

    if not check_tables_exist():
        logger.info("Tables missing, creating...")
        try:
            init_db()
            logger.info("Tables created")
        except Exception:
            logger.exception("Table creation failed")
            raise
    else:
        logger.info("Tables already exist")


if __name__ == "__main__":
    auto_init()
