"""Settings modules, one per APP_ENV.

development keeps the tracker in a local JSON file, testing uses in-memory
slots with no background scheduler, production stores slots in MySQL.
"""

import os

_BY_ENV = {
    "development": "config.development",
    "dev": "config.development",
    "testing": "config.testing",
    "test": "config.testing",
    "production": "config.production",
    "prod": "config.production",
}


def get_settings_module() -> str:
    env = os.getenv("APP_ENV", "development").strip().lower()
    return _BY_ENV.get(env, "config.development")
