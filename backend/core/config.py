"""
Configuration for the ClassPro Wrapped Backend

Settings come from environment variables (optionally via backend/.env).
Uses Firebase Admin SDK when the snapshot store is backed by Firestore.
"""

import os
from pathlib import Path

import firebase_admin
from firebase_admin import credentials, firestore
from dotenv import load_dotenv

# Load environment variables from .env file
env_path = Path(__file__).parent.parent / ".env"
load_dotenv(env_path)

# Timezone used for "today" (the calendar scraper runs on IST)
CLASSPRO_TIMEZONE = os.getenv("CLASSPRO_TIMEZONE", "Asia/Kolkata")

# Length of the Wrapped window after the last working day
WRAPPED_WINDOW_DAYS = int(os.getenv("WRAPPED_WINDOW_DAYS", "30"))

# memory | redis | firestore
WRAPPED_STORE_BACKEND = os.getenv("WRAPPED_STORE_BACKEND", "memory").strip().lower()

DEFAULT_REDIS_URL = "redis://localhost:6379/0"
REDIS_URL = os.getenv("REDIS_URL", DEFAULT_REDIS_URL)
REDIS_HOST = os.getenv("REDIS_HOST", "localhost")
REDIS_PORT = int(os.getenv("REDIS_PORT", "6379"))
REDIS_DB = int(os.getenv("REDIS_DB", "0"))
REDIS_PASSWORD = os.getenv("REDIS_PASSWORD", None)

CORS_ORIGINS = [
    origin.strip()
    for origin in os.getenv(
        "CORS_ORIGINS",
        "http://localhost:3000,http://127.0.0.1:3000"
    ).split(",")
    if origin.strip()
]

FIREBASE_PROJECT_ID = os.getenv("FIREBASE_PROJECT_ID")

# Service account key path
SERVICE_ACCOUNT_PATH = os.getenv("FIREBASE_SERVICE_ACCOUNT_PATH", "serviceAccountKey.json")

# Global Firestore client
_db = None


def initialize_firebase():
    """
    Initialize Firebase Admin SDK.

    Only needed when WRAPPED_STORE_BACKEND=firestore. Looks for a service
    account key next to the backend first, then falls back to default
    credentials (for cloud environments).
    """
    global _db

    if _db is not None:
        return _db

    backend_dir = Path(__file__).parent.parent
    possible_paths = [
        backend_dir / SERVICE_ACCOUNT_PATH,             # backend/key.json
        Path("backend") / SERVICE_ACCOUNT_PATH,         # From project root
        Path(SERVICE_ACCOUNT_PATH)                      # Direct path
    ]

    if not firebase_admin._apps:
        for path in possible_paths:
            if path.exists():
                cred = credentials.Certificate(str(path))
                firebase_admin.initialize_app(cred)
                break
        else:
            firebase_admin.initialize_app(options={
                'projectId': FIREBASE_PROJECT_ID
            })

    _db = firestore.client()
    return _db


def get_firestore_client():
    """Get the Firestore client instance."""
    global _db
    if _db is None:
        _db = initialize_firebase()
    return _db
