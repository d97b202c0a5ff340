"""
Firestore-backed key-value store.

Each key becomes one document in the `wrapped_store` collection:

    wrapped_store/{sanitized key} -> {"key": ..., "value": "<json text>", "updated_at": ...}
"""

from datetime import datetime, timezone
from typing import Any, Dict, Optional

from core.config import get_firestore_client


class FirestoreStore:
    """Key-value store on top of a Firestore collection."""

    def __init__(self, collection: str = "wrapped_store"):
        self.db = get_firestore_client()
        self.collection = collection

    @property
    def is_connected(self) -> bool:
        return self.db is not None

    def get(self, key: str) -> Optional[str]:
        try:
            doc = self.db.collection(self.collection).document(self._sanitize_doc_id(key)).get()
            if not doc.exists:
                return None
            value = (doc.to_dict() or {}).get("value")
            return value if isinstance(value, str) else None
        except Exception as e:
            print(f"[CACHE] Firestore get error for {key}: {e}")
            return None

    def set(self, key: str, value: str) -> bool:
        try:
            self.db.collection(self.collection).document(self._sanitize_doc_id(key)).set({
                "key": key,
                "value": value,
                "updated_at": datetime.now(timezone.utc).isoformat()
            })
            return True
        except Exception as e:
            print(f"[CACHE] Firestore set error for {key}: {e}")
            return False

    def delete(self, key: str) -> bool:
        try:
            self.db.collection(self.collection).document(self._sanitize_doc_id(key)).delete()
            return True
        except Exception as e:
            print(f"[CACHE] Firestore delete error for {key}: {e}")
            return False

    def get_stats(self) -> Dict[str, Any]:
        return {"connected": self.is_connected, "backend": "firestore", "collection": self.collection}

    def _sanitize_doc_id(self, key: str) -> str:
        """Firestore document IDs cannot contain forward slashes"""
        return key.replace("/", "_")
