from refurb_pricing.db.session import get_engine
from refurb_pricing.db.base import Base

def init_db():
    # 导入所有表，保证 metadata 完整
    import refurb_pricing.models  # noqa: F401

    engine = get_engine()
    Base.metadata.create_all(bind=engine)
