import sys
from pathlib import Path

# Add project root to Python path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from loguru import logger

from focusramp.db.session import get_engine
from focusramp.plans.models import Base


def init_db():
    """Create all plan store tables."""
    Base.metadata.create_all(bind=get_engine())
    logger.info("Database tables created successfully.")


if __name__ == "__main__":
    init_db()
