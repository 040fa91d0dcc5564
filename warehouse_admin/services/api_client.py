"""
Data API Client
Read access to the warehouse data API (invoices, inventory, partners, users, logs).
"""

from typing import Any, Dict, List, Optional

from warehouse_admin.services.http import BackendClient

ROW_KEYS = ("data", "items", "rows")


def extract_rows(body: Any) -> List[Dict[str, Any]]:
    """Rows from a bare JSON list or from a wrapper object"""
    if isinstance(body, list):
        return [row for row in body if isinstance(row, dict)]
    if isinstance(body, dict):
        for key in ROW_KEYS:
            if isinstance(body.get(key), list):
                return extract_rows(body[key])
    return []


class ApiClient(BackendClient):

    def list(self, resource: str, access_token: Optional[str], params: Optional[Dict] = None) -> List[Dict[str, Any]]:
        body = self._make_request(f"/{resource}", params=params, access_token=access_token)
        return extract_rows(body)
