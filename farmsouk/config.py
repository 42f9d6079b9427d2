# farmsouk/config.py
import os
from datetime import timedelta
from dotenv import load_dotenv

# Base directory of this config file (farmsouk/) and the project root one level up
CONFIG_FILE_DIR = os.path.abspath(os.path.dirname(__file__))
PROJECT_ROOT = os.path.dirname(CONFIG_FILE_DIR)

dotenv_path = os.path.join(PROJECT_ROOT, '.env')
if os.path.exists(dotenv_path):
    load_dotenv(dotenv_path)

DEFAULT_SECRET_KEY = 'change_this_default_secret_key_in_prod_farmsouk'
DEFAULT_ADMIN_PASSWORD = 'change-me'


def _session_ttl_from_env(default_days=30):
    days = int(os.environ.get('FARMER_SESSION_TTL_DAYS', default_days))
    return timedelta(days=days) if days > 0 else None


class Config:
    """Base configuration."""
    SECRET_KEY = os.environ.get('SECRET_KEY', DEFAULT_SECRET_KEY)
    DEBUG = False
    TESTING = False
    API_VERSION = "v1.0"

    # Embedded single-file store by default; DATABASE_URL points at a networked one.
    SQLALCHEMY_DATABASE_URI = os.environ.get('DATABASE_URL') or \
        'sqlite:///' + os.path.join(PROJECT_ROOT, 'instance', 'farmsouk.sqlite3')
    SQLALCHEMY_TRACK_MODIFICATIONS = False
    SQLALCHEMY_ECHO = False
    STORE_TIMEOUT_SECONDS = int(os.environ.get('STORE_TIMEOUT_SECONDS', 10))

    MAX_CONTENT_LENGTH = 800 * 1024

    # --- Admin gate ---
    ADMIN_PASSWORD = os.environ.get('ADMIN_PASSWORD', DEFAULT_ADMIN_PASSWORD)
    ADMIN_HEADER_NAME = os.environ.get('ADMIN_HEADER_NAME', 'X-Admin-Password')

    WHATSAPP_NUMBER = os.environ.get('WHATSAPP_NUMBER', '212600000000')

    # --- Seller credentials & sessions ---
    PASSWORD_HASH_METHOD = os.environ.get('PASSWORD_HASH_METHOD', 'scrypt')
    PASSWORD_MIN_LENGTH = 6
    PASSWORD_MAX_LENGTH = 128
    FARMER_SESSION_TTL = _session_ttl_from_env()

    # --- Catalog & checkout limits ---
    CATALOG_LIST_LIMIT = 200
    ADMIN_ORDER_LIST_LIMIT = 200
    PRODUCT_MIN_PRICE_MAD = 10
    PRODUCT_MAX_PRICE_MAD = 200000
    PRODUCT_MAX_IMAGES = 6
    ORDER_MAX_QTY = 10

    LOG_LEVEL = os.environ.get('LOG_LEVEL', 'INFO').upper()
    LOG_FILE = os.environ.get('LOG_FILE', None)

    CORS_ORIGINS = os.environ.get('CORS_ORIGINS', "http://localhost:3000,http://127.0.0.1:3000")

    # JSON-only API: nothing should ever be rendered or framed.
    CONTENT_SECURITY_POLICY = {
        'default-src': ['\'none\''],
        'frame-ancestors': ['\'none\'']
    }
    TALISMAN_FORCE_HTTPS = False


class DevelopmentConfig(Config):
    DEBUG = True
    LOG_LEVEL = 'DEBUG'
    SQLALCHEMY_DATABASE_URI = os.environ.get('DEV_DATABASE_URL') or \
        'sqlite:///' + os.path.join(PROJECT_ROOT, 'instance', 'dev_farmsouk.sqlite3')


class TestingConfig(Config):
    TESTING = True
    DEBUG = False
    SQLALCHEMY_DATABASE_URI = os.environ.get('TEST_DATABASE_URL', 'sqlite:///:memory:')
    ADMIN_PASSWORD = 'test-admin-secret'
    # Fast KDF for the test suite; production keeps scrypt.
    PASSWORD_HASH_METHOD = 'pbkdf2:sha256:1000'
    FARMER_SESSION_TTL = timedelta(days=30)
    TALISMAN_FORCE_HTTPS = False


class ProductionConfig(Config):
    DEBUG = False
    TESTING = False
    TALISMAN_FORCE_HTTPS = True

    # Networked relational store
    MYSQL_USER_PROD = os.environ.get('MYSQL_USER_PROD')
    MYSQL_PASSWORD_PROD = os.environ.get('MYSQL_PASSWORD_PROD')
    MYSQL_HOST_PROD = os.environ.get('MYSQL_HOST_PROD')
    MYSQL_DB_PROD = os.environ.get('MYSQL_DB_PROD')
    if all([MYSQL_USER_PROD, MYSQL_PASSWORD_PROD, MYSQL_HOST_PROD, MYSQL_DB_PROD]):
        SQLALCHEMY_DATABASE_URI = f"mysql+pymysql://{MYSQL_USER_PROD}:{MYSQL_PASSWORD_PROD}@{MYSQL_HOST_PROD}/{MYSQL_DB_PROD}"

    CORS_ORIGINS = os.environ.get('PROD_CORS_ORIGINS', Config.CORS_ORIGINS)


config_by_name = dict(
    development=DevelopmentConfig,
    testing=TestingConfig,
    production=ProductionConfig,
    default=DevelopmentConfig
)


def engine_options_for(database_uri, timeout_seconds):
    """Every store call gets a bound: lock wait on SQLite, pool checkout on networked stores."""
    if database_uri.startswith('sqlite'):
        return {"connect_args": {"timeout": timeout_seconds}}
    return {"pool_timeout": timeout_seconds, "pool_pre_ping": True, "pool_recycle": 1800}


def get_config_by_name(config_name_str=None):
    """
    Retrieves a configuration instance by name.
    Creates the SQLite instance directory and log directory when needed.
    """
    if config_name_str is None:
        config_name_str = os.getenv('FLASK_ENV', 'default')

    SelectedConfigClass = config_by_name.get(config_name_str.lower())
    if not SelectedConfigClass:
        print(f"Warning: Config name '{config_name_str}' not found. Using default.")
        SelectedConfigClass = config_by_name['default']

    config_instance = SelectedConfigClass()
    config_instance.SQLALCHEMY_ENGINE_OPTIONS = engine_options_for(
        config_instance.SQLALCHEMY_DATABASE_URI, config_instance.STORE_TIMEOUT_SECONDS)

    if isinstance(config_instance, ProductionConfig):
        if config_instance.SECRET_KEY == DEFAULT_SECRET_KEY:
            raise ValueError("Production SECRET_KEY is not set or is using the default value.")
        if not config_instance.ADMIN_PASSWORD or config_instance.ADMIN_PASSWORD == DEFAULT_ADMIN_PASSWORD:
            raise ValueError("Production ADMIN_PASSWORD is not set or is using the default value.")

    uri = config_instance.SQLALCHEMY_DATABASE_URI
    paths_to_create = [
        os.path.dirname(uri.replace('sqlite:///', ''))
            if uri.startswith('sqlite:///') and not uri.endswith(':memory:')
            else None,
        os.path.dirname(config_instance.LOG_FILE) if config_instance.LOG_FILE else None
    ]
    for path in paths_to_create:
        if path:
            try:
                os.makedirs(path, exist_ok=True)
            except OSError as e:
                print(f"Warning: Could not create directory {path}: {e}")

    return config_instance
