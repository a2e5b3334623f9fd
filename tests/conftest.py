import os

# Point both services at SQLite before their database modules are imported
os.environ["DATABASE_URL"] = "sqlite://"
