import logging
from flask import Flask
from WarmHome.app.config import Config


def create_app(config_object=Config):
    """
    Application Factory Pattern to initialize the Flask App
    """
    # 1. Logging for the whole process
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    # 2. Initialize the Flask application
    app = Flask(__name__)

    # 3. Load configuration from config.py
    app.config.from_object(config_object)

    # 4. Import Blueprints
    # Imports are done here to avoid circular import errors
    from WarmHome.app.routes.main import main_bp
    from WarmHome.app.routes.data_api import data_bp
    from WarmHome.app.routes.chatbot import chatbot_bp

    # 5. Register Blueprints
    app.register_blueprint(main_bp)
    app.register_blueprint(data_bp)
    app.register_blueprint(chatbot_bp)

    return app
