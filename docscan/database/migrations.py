from pathlib import Path

from docscan.database.connection import get_connection

SCHEMA_PATH = Path(__file__).parent / "schema.sql"


def apply_schema() -> None:
    """Create the scan tables if they do not exist yet."""
    with get_connection() as conn:
        conn.execute(SCHEMA_PATH.read_text(encoding="utf-8"))
        conn.commit()
