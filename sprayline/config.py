import os
from dotenv import load_dotenv

load_dotenv()


def _env_float(name, default):
    value = os.environ.get(name)
    if value is None or value.strip() == "":
        return default
    return float(value)


class Config:
    """Base configuration class with common settings."""
    # Gas flow rates used for oxygen/acetylene consumption (liters per hour)
    OXYGEN_FLOW_LPH = _env_float("OXYGEN_FLOW_LPH", 1.0)
    ACETYLENE_FLOW_LPH = _env_float("ACETYLENE_FLOW_LPH", 1.15)

    # Cylinder capacities (liters)
    OXYGEN_CYLINDER_L = _env_float("OXYGEN_CYLINDER_L", 50.0)
    ACETYLENE_CYLINDER_L = _env_float("ACETYLENE_CYLINDER_L", 55.0)

    # Delivery simulation horizon (calendar days)
    SCHEDULING_HORIZON_DAYS = int(_env_float("SCHEDULING_HORIZON_DAYS", 365 * 5))

    # Logging
    LOG_LEVEL = os.environ.get("LOG_LEVEL", "INFO")
    LOG_FILE = os.environ.get("LOG_FILE")  # stdout only when unset
    LOG_JSON = os.environ.get("LOG_JSON", "false").lower() == "true"

    # CORS configuration
    CORS_ORIGINS = os.environ.get("CORS_ORIGINS", "*")

    TESTING = False


class LocalConfig(Config):
    """Configuration for local development."""
    ENV = "local"
    DEBUG = True


class SandboxConfig(Config):
    """Configuration for sandbox/staging environment."""
    ENV = "sandbox"
    DEBUG = False


class ProductionConfig(Config):
    """Configuration for production environment."""
    ENV = "production"
    DEBUG = False


class TestingConfig(Config):
    """Configuration used by the test suite."""
    ENV = "testing"
    DEBUG = False
    TESTING = True
    LOG_FILE = None


def get_config():
    """Get the appropriate configuration class based on environment variable.

    Environment is determined by FLASK_ENV or ENVIRONMENT variable:
    - 'local' or 'development' -> LocalConfig
    - 'sandbox' or 'staging' -> SandboxConfig
    - 'production' or 'prod' -> ProductionConfig
    - 'test' or 'testing' -> TestingConfig

    Defaults to LocalConfig if not set.
    """
    env = (os.environ.get("FLASK_ENV") or os.environ.get("ENVIRONMENT", "local")).lower()

    if env in ["local", "development", "dev"]:
        return LocalConfig
    elif env in ["sandbox", "staging", "stage"]:
        return SandboxConfig
    elif env in ["production", "prod"]:
        return ProductionConfig
    elif env in ["test", "testing"]:
        return TestingConfig
    else:
        # Default to local for safety
        return LocalConfig
