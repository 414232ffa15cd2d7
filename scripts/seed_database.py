#!/usr/bin/env python3
# =============================================================================
# scripts/seed_database.py - Populate the Catalog
# =============================================================================
# Inserts the starter quotes and books that aren't in the catalog yet.
#
# Usage:
#   python scripts/seed_database.py
#
# Prerequisites:
#   - SUPABASE_URL / SUPABASE_SERVICE_KEY set (.env file)
#   - quotes and books tables created
# =============================================================================

import logging
import os
import sys

# Add project root to path
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from dotenv import load_dotenv
load_dotenv()

from app.dependencies import get_row_store
from core.services.seed_service import seed_database

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)


def main():
    """Seed the catalog and report what was added."""
    print("=" * 60)
    print("Catalog Seeder")
    print("=" * 60)

    result = seed_database(get_row_store())

    print()
    print(result.message)
    print()


if __name__ == "__main__":
    main()
