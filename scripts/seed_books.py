#!/usr/bin/env python3
"""
Tracklist - Book Seeding Script

Loads a JSON list of books into the database named by DATABASE_URL
(or --database-url).

    python scripts/seed_books.py books.json
"""

import argparse
import sys

from dotenv import load_dotenv

from tracklist.api.dependencies import Settings
from tracklist.storage.database import Database
from tracklist.storage.seed import load_books_file, seed_books


def main() -> int:
    load_dotenv()

    parser = argparse.ArgumentParser(description="Seed the books table")
    parser.add_argument("path", help="JSON file with a list of books")
    parser.add_argument("--database-url", default=None, help="Overrides DATABASE_URL")
    args = parser.parse_args()

    database_url = args.database_url or Settings.from_env().database_url

    try:
        books = load_books_file(args.path)
    except (OSError, ValueError) as e:
        print(f"Error: {e}")
        return 1

    database = Database(database_url)
    try:
        count = seed_books(database, books)
    finally:
        database.dispose()

    print(f"Inserted {count} books into {database_url}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
