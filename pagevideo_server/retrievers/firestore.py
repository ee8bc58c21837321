import json
import logging
from typing import Any, Dict, List, Optional

import requests

from .base import BaseLookupClient
from ..core.config import get_firestore_config
from ..core.error import ErrorType, LookupFailure, PageVideoError
from ..models.schema import VideoRecord

FIRESTORE_BASE_URL = "https://firestore.googleapis.com/v1"

logger = logging.getLogger("pagevideo.retrievers.firestore")


def decode_value(value: Dict[str, Any]) -> Any:
    """
    Decode one Firestore REST typed value ({"stringValue": ...}, {"arrayValue": ...}, ...).
    """
    if not isinstance(value, dict):
        return None
    if "stringValue" in value:
        return value["stringValue"]
    if "arrayValue" in value:
        return [decode_value(v) for v in (value["arrayValue"] or {}).get("values", [])]
    if "integerValue" in value:
        try:
            return int(value["integerValue"])
        except (TypeError, ValueError):
            return None
    if "doubleValue" in value:
        return value["doubleValue"]
    if "booleanValue" in value:
        return value["booleanValue"]
    if "mapValue" in value:
        fields = (value["mapValue"] or {}).get("fields", {})
        return {k: decode_value(v) for k, v in fields.items()}
    return None


class FirestoreLookupClient(BaseLookupClient):
    """
    Query a Firestore collection for documents whose keyword array contains a keyword.
    """

    source = "firestore"

    def __init__(self, config: Optional[Dict[str, Any]] = None) -> None:
        self.config = config or get_firestore_config()
        if not self.config.get("project_id"):
            raise PageVideoError(
                "FIRESTORE_PROJECT_ID is not set",
                ErrorType.INVALID_PARAMS,
            )

    @property
    def run_query_url(self) -> str:
        cfg = self.config
        return (
            f"{FIRESTORE_BASE_URL}/projects/{cfg['project_id']}"
            f"/databases/{cfg['database']}/documents:runQuery"
        )

    def build_query(self, keyword: str) -> Dict[str, Any]:
        cfg = self.config
        return {
            "structuredQuery": {
                "from": [{"collectionId": cfg["collection"]}],
                "where": {
                    "fieldFilter": {
                        "field": {"fieldPath": cfg["keywords_field"]},
                        "op": "ARRAY_CONTAINS",
                        "value": {"stringValue": keyword},
                    }
                },
                "limit": cfg["max_results"],
            }
        }

    def parse_response(self, rows: Any) -> List[VideoRecord]:
        """
        Convert a runQuery response (a JSON list of rows) into VideoRecords.
        Rows without a document (e.g. only readTime) and documents without a
        string URL are skipped.
        """
        if not isinstance(rows, list):
            raise LookupFailure(f"Unexpected runQuery response: {type(rows).__name__}")
        cfg = self.config
        records: List[VideoRecord] = []
        for row in rows:
            doc = row.get("document") if isinstance(row, dict) else None
            if not doc:
                continue
            fields = doc.get("fields") or {}
            record = self.create_video_record(
                video_url=decode_value(fields.get(cfg["url_field"])),
                keywords=decode_value(fields.get(cfg["keywords_field"])),
                id=(doc.get("name") or "").rsplit("/", 1)[-1],
                title=decode_value(fields.get("title")),
            )
            if record is not None:
                records.append(record)
        return records

    def lookup(self, keyword: str) -> List[VideoRecord]:
        cfg = self.config
        headers = {"Content-Type": "application/json"}
        if cfg.get("id_token"):
            headers["Authorization"] = f"Bearer {cfg['id_token']}"
        params = {"key": cfg["api_key"]} if cfg.get("api_key") else None

        try:
            resp = requests.post(
                self.run_query_url,
                headers=headers,
                params=params,
                data=json.dumps(self.build_query(keyword)),
                timeout=cfg["http_timeout"],
            )
            resp.raise_for_status()
            rows = resp.json()
        except Exception as exc:
            raise LookupFailure(f"Firestore query failed: {exc}", keyword=keyword) from exc

        records = self.parse_response(rows)
        logger.debug("Firestore lookup %r -> %d record(s)", keyword, len(records))
        return records
