import os
import yaml

ROOT_PATH = os.path.dirname(__file__)
CONFIG_FILE_PATH = os.path.join(ROOT_PATH, "env.yaml")

if os.path.exists(CONFIG_FILE_PATH):
    with open(CONFIG_FILE_PATH, "r") as r_file:
        data = yaml.safe_load(r_file) or dict()
else:
    data = dict()


class ApplicationConfig:
    DB_URI = data.get("DB_URI", "sqlite+aiosqlite:///./dairy.db")
    DB_ECHO = bool(data.get("DB_ECHO", False))
    API_PREFIX = data.get("API_PREFIX", "/api/v1")
    API_PORT = data.get("API_PORT", 8000)
    API_HOST = data.get("API_HOST", "0.0.0.0")
    CORS_ORIGINS = data.get("CORS_ORIGINS", [])
    CORS_ALLOW_CREDENTIALS = data.get("CORS_ALLOW_CREDENTIALS", True)
    LOG_LEVEL = data.get("LOG_LEVEL", "INFO")
    AUTH_DISABLED = bool(data.get("AUTH_DISABLED", False))

    # Authentication
    JWT_SECRET = data.get("JWT_SECRET", "change-me")
    JWT_ALGORITHM = data.get("JWT_ALGORITHM", "HS256")
    JWT_EXPIRES_MINUTES = data.get("JWT_EXPIRES_MINUTES", 60 * 24 * 7)  # One week
    BCRYPT_ROUNDS = data.get("BCRYPT_ROUNDS", 10)
    ADMIN_EMAIL = data.get("ADMIN_EMAIL", "admin@milkdelivery.com")

    # Invoicing
    INVOICE_DUE_DAYS = data.get("INVOICE_DUE_DAYS", 15)  # Days after period end
    CURRENCY = data.get("CURRENCY", "INR")
    COMPANY_NAME = data.get("COMPANY_NAME", "Fresh Dairy Home Delivery")
    COMPANY_ADDRESS = data.get("COMPANY_ADDRESS", "12 Milk Lane, Pune 411001")
