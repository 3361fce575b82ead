import os

SECRET_KEY = "test-secret"

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "youth_attendance_test"),
}

DEBUG = False
TESTING = True

SNAPSHOT_BACKEND = "file"
SNAPSHOT_FILE = os.getenv("SNAPSHOT_FILE", "instance/test_snapshot.json")
SEED_CSV_PATH = os.getenv("SEED_CSV_PATH", "data/seed.csv")

LEADERBOARD_LIMIT = 5
AT_RISK_LIMIT = 5

AUTO_INIT_DB = False
