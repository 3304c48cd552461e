from __future__ import annotations

from staff_profiles.config import load_settings
from staff_profiles.database.bootstrap import apply_schema, ensure_demo_profiles
from staff_profiles.database.connection import DatabaseConnection, DBConfig
from staff_profiles.logging_config import configure_logging


def main() -> None:
    settings = load_settings()
    configure_logging(getattr(settings, "LOG_LEVEL", "INFO"))
    conn = DatabaseConnection(DBConfig.from_dict(settings.DB_CONFIG))

    apply_schema(conn)
    ensure_demo_profiles(conn)
    print(f"OK: Seeded database -> {conn.describe()}")


if __name__ == "__main__":
    main()
