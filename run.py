# run.py
"""
run.py
标准 Flask 服务启动脚本（给开发者 / 运维 / CLI 用）
仅用于本地 / 内网启动
"""
import os
import sys
from refurb_pricing.app_factory import create_app
from refurb_pricing.db.auto_init import auto_init


def get_app_base_dir():
    """
    获取程序根目录
    - 开发态：run.py 所在目录
    - PyInstaller：exe 所在目录
    """
    if getattr(sys, "frozen", False):
        return os.path.dirname(sys.executable)
    return os.path.abspath(os.path.dirname(__file__))


def configure_database():
    """
    未显式配置 DATABASE_URL 时，数据库固定为程序根目录下的 refurb_pricing.db
    """
    if os.getenv("DATABASE_URL"):
        return
    db_path = os.path.join(get_app_base_dir(), "refurb_pricing.db")
    os.environ["DATABASE_URL"] = f"sqlite:///{db_path}"#锁死数据库路径，防止打包后路径错乱
    print(f"📦 Using database: {db_path}")


def main():
    # 0️统一数据库路径
    configure_database()

    # 1️启动前初始化数据库
    auto_init()

    # 2️创建 Flask app
    app = create_app()
    print(app.url_map)

    # 3️启动参数
    host = os.getenv("HOST", "0.0.0.0")
    port = int(os.getenv("PORT", 5000))
    debug = os.getenv("FLASK_DEBUG", "0") == "1"

    app.run(host=host, port=port, debug=debug, use_reloader=False)


if __name__ == "__main__":
    main()
