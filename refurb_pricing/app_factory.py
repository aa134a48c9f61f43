'''组装 Flask App 的工厂（不启动服务）
注入配置，注册蓝图，注册 error handler；由 run.py / 测试调用'''
# refurb_pricing/app_factory.py
from flask import Flask, jsonify
import os
from dotenv import load_dotenv

from refurb_pricing.logger import get_logger

# 加载环境变量
load_dotenv()

logger = get_logger(__name__)

# 项目根目录（绝对路径）
BASE_DIR = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))


def create_app(config_overrides=None):
    """应用工厂函数"""
    app = Flask(__name__)

    # 确保 SECRET_KEY 是字符串类型（不是 bytes）
    secret_key = os.getenv('SECRET_KEY', 'dev-secret-key-change-in-production')
    if isinstance(secret_key, bytes):
        secret_key = secret_key.decode('utf-8')
    app.config['SECRET_KEY'] = secret_key

    # 数据库配置：get_session() 读取 DATABASE_URL
    db_path = os.path.join(BASE_DIR, 'refurb_pricing.db')
    os.environ.setdefault('DATABASE_URL', f"sqlite:///{db_path}")
    app.config['DATABASE_URL'] = os.environ['DATABASE_URL']

    # 文件上传配置
    app.config['MAX_CONTENT_LENGTH'] = int(os.getenv('MAX_UPLOAD_SIZE', 10485760))  # 10MB

    if config_overrides:
        app.config.update(config_overrides)

    # 注册蓝图
    from refurb_pricing.routes.price_calculator import price_calculator_bp
    from refurb_pricing.routes.products import products_bp
    from refurb_pricing.routes.spare_parts import spare_parts_bp
    from refurb_pricing.routes.dashboard import dashboard_bp

    app.register_blueprint(price_calculator_bp)
    app.register_blueprint(products_bp)
    app.register_blueprint(spare_parts_bp)
    app.register_blueprint(dashboard_bp)

    # 注册错误处理
    register_error_handlers(app)

    return app


def register_error_handlers(app):
    """注册错误处理器（统一返回 JSON）"""
    @app.errorhandler(404)
    def not_found(error):
        return jsonify({"success": False, "error": "Not found"}), 404

    @app.errorhandler(405)
    def method_not_allowed(error):
        return jsonify({"success": False, "error": "Method not allowed"}), 405

    @app.errorhandler(413)
    def too_large(error):
        return jsonify({"success": False, "error": "Uploaded file is too large"}), 413

    @app.errorhandler(500)
    def internal_error(error):
        logger.error(f"Unhandled server error: {error}")
        return jsonify({"success": False, "error": "Internal server error"}), 500
