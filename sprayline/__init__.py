from flask import Flask, jsonify
from flask_cors import CORS

from sprayline.logging_config import configure_logging, get_logger

logger = get_logger(__name__)


def create_app(config_class=None):
    # Import config after dotenv is loaded
    from sprayline.config import get_config
    from sprayline.planning.config import PlanningConfig
    from sprayline.api import api_bp

    # Get the appropriate config class based on environment
    if config_class is None:
        config_class = get_config()

    app = Flask(__name__)
    app.config.from_object(config_class)

    configure_logging(
        log_level=app.config.get("LOG_LEVEL", "INFO"),
        log_file=app.config.get("LOG_FILE"),
        json_console=app.config.get("LOG_JSON", False),
    )

    # Planning constants shared by every request
    app.config["PLANNING_CONFIG"] = PlanningConfig.from_mapping(app.config)

    logger.info(f"Starting application in {config_class.ENV} environment")

    # Get allowed origins from environment variable
    allowed_origins = app.config.get("CORS_ORIGINS", "*")
    if allowed_origins != "*":
        # Parse comma-separated list if provided
        allowed_origins = [origin.strip() for origin in allowed_origins.split(",")]

    CORS(app,
         resources={r"/api/*": {"origins": allowed_origins}},
         supports_credentials=True,
         allow_headers=["Content-Type", "Authorization"],
         methods=["GET", "POST", "OPTIONS"])

    app.register_blueprint(api_bp, url_prefix="/api")

    @app.route("/")
    def index():
        return "Sprayline planning service", 200

    @app.errorhandler(404)
    def not_found(error):
        return jsonify({"error": "Not found"}), 404

    return app
