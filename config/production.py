import os

SECRET_KEY = os.getenv("SECRET_KEY", "please-set-SECRET_KEY")

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "youth_attendance"),
}

DEBUG = False

SNAPSHOT_BACKEND = os.getenv("SNAPSHOT_BACKEND", "mysql")
SNAPSHOT_FILE = os.getenv("SNAPSHOT_FILE", "instance/snapshot.json")
SEED_CSV_PATH = os.getenv("SEED_CSV_PATH", "data/seed.csv")

LEADERBOARD_LIMIT = int(os.getenv("LEADERBOARD_LIMIT", "5"))
AT_RISK_LIMIT = int(os.getenv("AT_RISK_LIMIT", "10"))

AUTO_INIT_DB = bool(int(os.getenv("AUTO_INIT_DB", "0")))
