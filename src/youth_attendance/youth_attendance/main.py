from __future__ import annotations

import importlib
import logging
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv
from flask import Flask

from config import get_settings_module

from .api.controller import register as register_api
from .container import Container, build_container
from .database.bootstrap import apply_schema, list_tables
from .database.connection import DBConfig

REPO_ROOT = Path(__file__).resolve().parents[3]


def _repo_path(value: str) -> Path:
    path = Path(value)
    return path if path.is_absolute() else REPO_ROOT / path


def create_app(container: Optional[Container] = None) -> Flask:
    load_dotenv(override=False)
    app = Flask(__name__)

    settings_module = get_settings_module()
    settings = importlib.import_module(settings_module)
    app.secret_key = getattr(settings, "SECRET_KEY")
    app.config["DEBUG"] = bool(getattr(settings, "DEBUG", False))
    app.config["TESTING"] = bool(getattr(settings, "TESTING", False))

    logging.basicConfig(
        level=logging.DEBUG if app.config["DEBUG"] else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    db_config = getattr(settings, "DB_CONFIG")
    backend = str(getattr(settings, "SNAPSHOT_BACKEND", "file"))

    if app.config["DEBUG"]:
        print("[youth-attendance] settings=", settings_module, " snapshot backend=", backend)

    if backend == "mysql" and bool(getattr(settings, "AUTO_INIT_DB", False)):
        apply_schema(db_config, schema_path=REPO_ROOT / "database" / "schema.sql")
        if app.config["DEBUG"]:
            print(
                f"[youth-attendance] schema ready on {DBConfig.from_dict(db_config).describe()} "
                f"(tables={len(list_tables(db_config))})"
            )

    if container is None:
        container = build_container(
            seed_csv_path=_repo_path(getattr(settings, "SEED_CSV_PATH", "data/seed.csv")),
            backend=backend,
            db_config=db_config,
            snapshot_file=_repo_path(getattr(settings, "SNAPSHOT_FILE", "instance/snapshot.json")),
            leaderboard_limit=int(getattr(settings, "LEADERBOARD_LIMIT", 5)),
            at_risk_limit=int(getattr(settings, "AT_RISK_LIMIT", 5)),
        )

    if app.config["DEBUG"]:
        print(f"[youth-attendance] loaded {len(container.store.groups)} groups")

    register_api(app, container)
    return app
