"""
# Scripts

Command-line entry points for seeding and querying the bookstore collection.

## Scripts

| Script | Purpose |
|--------|---------|
| `seed_books.py` | Drops and re-seeds the collection with the 12 catalog books |
| `run_queries.py` | Runs the CRUD, aggregation and indexing walkthrough |
| `validate_seed.py` | Compares the collection with the catalog |
| `seed_all.py` | Seeds, then runs the queries |

## Usage

```bash
# Seed and query
poetry run seed-all

# Individual steps
poetry run seed-books
poetry run run-queries

# Validation
poetry run validate-seed
```
"""
