from __future__ import annotations

import importlib

from config import get_settings_module

from shiftdesk.common.logger import configure_logging
from shiftdesk.database.bootstrap import DEMO_USERS, ensure_demo_users


def main() -> None:
    configure_logging("INFO")
    settings = importlib.import_module(get_settings_module())
    db_config = dict(settings.DB_CONFIG)

    ensure_demo_users(db_config)

    print(
        "OK: Seeded demo users -> "
        f"{db_config.get('user')}@{db_config.get('host')}:{db_config.get('port', 3306)}/{db_config.get('database')} "
        f"({', '.join(row[1] for row in DEMO_USERS)})"
    )


if __name__ == "__main__":
    main()
