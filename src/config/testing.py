import os

SECRET_KEY = "test-secret"

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "levant_test"),
}

DEBUG = False
TESTING = True

STORE_BACKEND = "memory"

AUTO_INIT_DB = False

ADMIN_DISPLAY_NAME = "Admin"

LOG_LEVEL = "WARNING"
