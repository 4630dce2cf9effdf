import os

from dotenv import find_dotenv, load_dotenv

_ENV_ALIASES = {"dev": "development", "prod": "production"}


def _load_env_files() -> None:
    """
    Load `.env`, then either the file named by ENV_FILE or
    `.env.<ENVIRONMENT>`. Variables already set in the process win.
    """
    for name in (".env", os.environ.get("ENV_FILE")):
        path = name and (name if os.path.isabs(name) else find_dotenv(name, usecwd=True))
        if path:
            load_dotenv(path, override=False)
    if os.environ.get("ENV_FILE"):
        return

    environment = os.environ.get("ENVIRONMENT", "").strip().lower()
    if environment:
        path = find_dotenv(f".env.{_ENV_ALIASES.get(environment, environment)}", usecwd=True)
        if path:
            load_dotenv(path, override=False)


_load_env_files()

# === Environment Configuration ===
ENVIRONMENT = os.environ.get("ENVIRONMENT", "development")  # development, staging, production

# === Server Configuration ===
SERVER_HOST = os.environ.get("SERVER_HOST", "0.0.0.0")


def _get_int_env(var_name: str, default_value: int) -> int:
    # tolerate stray whitespace and a trailing ";" from copied shell exports
    text = os.environ.get(var_name, "").strip().rstrip(";")
    try:
        return int(text)
    except ValueError:
        return default_value


SERVER_PORT = _get_int_env("PORT", _get_int_env("SERVER_PORT", 3000))
DEBUG = os.environ.get("DEBUG", "true").lower() == "true"
LOG_LEVEL = os.environ.get("LOG_LEVEL", "DEBUG" if DEBUG else "INFO").upper()


# === CORS Configuration ===
def _get_cors_origins() -> list[str]:
    # comma-separated, e.g. "http://localhost:5173,https://travelio.example.com"
    raw = os.environ.get("CORS_ORIGINS", "").strip()
    if not raw:
        return ["*"]
    return [o.strip() for o in raw.split(",") if o.strip()]


CORS_ORIGINS = _get_cors_origins()

# === Database Configuration ===
MONGODB_URI = os.environ.get("MONGODB_URI")
DATABASE_NAME = os.environ.get("DATABASE_NAME", "travelio_user")

# === Stripe Configuration ===
STRIPE_SECRET_KEY = os.environ.get("STRIPE_SECRET_KEY")
PAYMENT_CURRENCY = os.environ.get("PAYMENT_CURRENCY", "usd").lower()
# Front-end origin used to build checkout success/cancel redirects
SITE_DOMAIN = os.environ.get("SITE_DOMAIN", "http://localhost:5173").rstrip("/")

# === Firebase (identity) Configuration ===
FIREBASE_PROJECT_ID = os.environ.get("FIREBASE_PROJECT_ID")
FIREBASE_CERTS_URL = os.environ.get(
    "FIREBASE_CERTS_URL",
    "https://www.googleapis.com/robot/v1/metadata/x509/securetoken@system.gserviceaccount.com",
)

# === Application Settings ===
APP_NAME = "Travelio Booking API"
APP_VERSION = "1.0.0"
