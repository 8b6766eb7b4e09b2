# ballotbox/config.py
# Central place for settings and constants
import os

from dotenv import load_dotenv

load_dotenv()

# Storage backend: "memory", "json" or "mongo"
STORAGE_BACKEND = os.getenv("STORAGE_BACKEND", "json")

# Dummy DB path (JSON) used by the "json" backend
DUMMY_DB_PATH = os.getenv("DUMMY_DB_PATH", "data/ballotbox_db.json")

# --- Database Config ---
MONGO_URI = os.getenv("MONGO_URI")
MONGO_DB = os.getenv("MONGO_DB")
ELECTIONS_COLLECTION_NAME = "elections"
VOTERS_COLLECTION_NAME = "voters"
PROPOSALS_COLLECTION_NAME = "proposals"
ACCOUNTS_COLLECTION_NAME = "accounts"
EVENTS_COLLECTION_NAME = "logs"
# Holds one {"_id": <name>, "seq": n} document per id sequence (proposals, events).
COUNTERS_COLLECTION_NAME = "counters"

# Address that owns the election. Only read when the election record is first created.
ELECTION_OWNER = os.getenv("ELECTION_OWNER", "admin")
# Password of the owner account seeded at startup. Without it nobody can log in as the owner.
ELECTION_OWNER_PASSWORD = os.getenv("ELECTION_OWNER_PASSWORD")

# --- Security & JWT Config ---
# In production, use secure, environment-variable-based secrets
SECRET_KEY = os.getenv("SECRET_KEY", "a_very_secret_key_for_dev_only")
ALGORITHM = "HS256"
ACCESS_TOKEN_EXPIRE_MINUTES = int(os.getenv("ACCESS_TOKEN_EXPIRE_MINUTES", "60"))

CORS_ORIGINS = [
    origin.strip()
    for origin in os.getenv("CORS_ORIGINS", "http://localhost:3000,http://localhost:5173").split(",")
    if origin.strip()
]

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
