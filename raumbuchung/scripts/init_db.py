import sys
import traceback

from raumbuchung.database import Base, engine
from raumbuchung.utils.logging_config import setup_logging
import raumbuchung.models  # noqa: F401

logger = setup_logging()


def main() -> int:
    """
    Legt alle Tabellen an, falls sie noch nicht existieren.
    Gibt Exit-Code zurück: 0 = Erfolg, 1 = Fehler
    """
    logger.info("Datenbank-Initialisierung gestartet")
    try:
        Base.metadata.create_all(bind=engine)
        logger.info(f"Tabellen angelegt: {', '.join(sorted(Base.metadata.tables))}")
        return 0
    except Exception as e:
        logger.error(f"Initialisierung fehlgeschlagen: {e}")
        logger.error(traceback.format_exc())
        return 1


if __name__ == "__main__":
    sys.exit(main())
