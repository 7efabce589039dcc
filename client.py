import requests
from typing import Optional

class XPClient:
    """Simple REST client for the XP tracker API."""

    def __init__(self, base_url: str = "http://localhost:8000", api_key: Optional[str] = None) -> None:
        self.base_url = base_url.rstrip("/")
        self.headers = {"X-API-Key": api_key} if api_key else {}

    def _get(self, path: str, **params):
        resp = requests.get(f"{self.base_url}{path}", params=params, headers=self.headers)
        resp.raise_for_status()
        return resp

    def _post(self, path: str, data: Optional[bytes] = None, **params):
        resp = requests.post(
            f"{self.base_url}{path}", params=params, data=data, headers=self.headers
        )
        resp.raise_for_status()
        return resp

    def status(self) -> dict:
        return self._get("/status").json()

    def levels(self) -> list:
        return self._get("/levels").json()

    def today(self) -> dict:
        return self._get("/today").json()

    def breakdown(self) -> dict:
        return self._get("/today/breakdown").json()

    def toggle_item(self, index: int) -> dict:
        return self._post(f"/today/items/{index}/toggle").json()

    def update_item(self, index: int, field: str, value: float) -> dict:
        return self._post(f"/today/items/{index}/update", field=field, value=value).json()

    def add_extra(self) -> int:
        return self._post("/today/extras").json()["index"]

    def toggle_extra(self, index: int) -> dict:
        return self._post(f"/today/extras/{index}/toggle").json()

    def update_extra(self, index: int, field: str, value: float) -> dict:
        return self._post(f"/today/extras/{index}/update", field=field, value=value).json()

    def rename_extra(self, index: int, name: str) -> dict:
        return self._post(f"/today/extras/{index}/rename", name=name).json()

    def toggle_leg_ext(self) -> dict:
        return self._post("/today/leg_ext/toggle").json()

    def update_leg_ext(self, field: str, value: float) -> dict:
        return self._post("/today/leg_ext/update", field=field, value=value).json()

    def set_run_meters(self, meters: float) -> dict:
        return self._post("/today/run", meters=meters).json()

    def commit(self) -> dict:
        return self._post("/today/commit").json()

    def reset_today(self) -> dict:
        return self._post("/today/reset").json()

    def hard_reset(self) -> None:
        self._post("/reset", confirm=True)

    def override_total_xp(self, value: float) -> float:
        return self._post("/total_xp", value=value).json()["totalXP"]

    def notes(self) -> list:
        return self._get("/notes").json()

    def export_backup(self) -> bytes:
        return self._get("/export").content

    def import_backup(self, blob: bytes) -> dict:
        return self._post("/import", data=blob).json()
