"""
Script to seed the card types every account studies.

Existing card types are left untouched, so the script can be run repeatedly.
"""
import sys
import logging
from pathlib import Path
from sqlmodel import Session

# Add the api directory to Python path so we can import from app
script_dir = Path(__file__).parent
api_dir = script_dir.parent
sys.path.insert(0, str(api_dir))

from app.core.database import engine, init_db
from app.models.card_type import CardType
from app.utils.time_utils import utcnow

logging.basicConfig(level=logging.INFO, format='%(asctime)s - %(levelname)s - %(message)s')
logger = logging.getLogger(__name__)

SEED_ACTOR = "system"

CARD_TYPES = [
    ("WORD_TO_MEANING", "Word to meaning", "Recall the meaning from the word"),
    ("MEANING_TO_WORD", "Meaning to word", "Recall the word from its meaning"),
    ("LISTEN_TO_WORD", "Listen to word", "Recognize the word from its pronunciation"),
]


def seed_card_types() -> int:
    """Insert the missing card types. Returns how many were inserted."""
    inserted = 0
    with Session(engine) as session:
        try:
            for code, name, description in CARD_TYPES:
                if session.get(CardType, code):
                    logger.info(f"Card type {code} already exists, skipping")
                    continue
                now = utcnow()
                session.add(CardType(
                    code=code,
                    name=name,
                    description=description,
                    created_at=now,
                    updated_at=now,
                    created_by=SEED_ACTOR,
                    updated_by=SEED_ACTOR,
                ))
                inserted += 1
                logger.info(f"Adding card type {code}")

            session.commit()
        except Exception as e:
            session.rollback()
            logger.error("Error seeding card types: %s", e, exc_info=True)
            raise
    return inserted


if __name__ == "__main__":
    logger.info("Starting card type seeding...")
    try:
        init_db()
        count = seed_card_types()
        logger.info(f"Successfully completed! Inserted {count} card types")
    except Exception as e:
        logger.error("Error during card type seeding: %s", e, exc_info=True)
        sys.exit(1)
