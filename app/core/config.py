import os

# ✅ Database
DATABASE_URL = os.getenv("DATABASE_URL", "sqlite:///./counter.db")
RUN_MIGRATIONS = os.getenv("RUN_MIGRATIONS", "0") == "1"

# ✅ Security
SECRET_KEY = os.getenv("SECRET_KEY", "change-me")
ALGORITHM = os.getenv("ALGORITHM", "HS256")
ACCESS_TOKEN_EXPIRE_MINUTES = int(os.getenv("ACCESS_TOKEN_EXPIRE_MINUTES", "60"))
BCRYPT_ROUNDS = int(os.getenv("BCRYPT_ROUNDS", "10"))

# ✅ Default account provisioned by GET /setup
DEFAULT_USER_EMAIL = os.getenv("DEFAULT_USER_EMAIL", "admin@example.com")
DEFAULT_USER_PASSWORD = os.getenv("DEFAULT_USER_PASSWORD", "admin")

# ✅ Counter
# Shared by the API and app.client: one server increment per batch of local clicks
BATCH_SIZE = int(os.getenv("BATCH_SIZE", "108"))

# ✅ HTTP
CORS_ORIGINS = [o.strip() for o in os.getenv("CORS_ORIGINS", "*").split(",") if o.strip()]
DEBUG = os.getenv("DEBUG", "0") == "1"
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
LOG_DIR = os.getenv("LOG_DIR", "logs")  # empty for console-only logging

# ✅ Client
COUNTER_API_URL = os.getenv("COUNTER_API_URL", "http://localhost:5050")
