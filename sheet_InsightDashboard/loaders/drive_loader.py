# sheet_InsightDashboard/loaders/drive_loader.py
from __future__ import annotations
from dataclasses import dataclass
from typing import Any, Optional
import logging, os
import requests

_LOG = logging.getLogger(__name__)

API_ROOT = "https://www.googleapis.com/drive/v3/files"
SHEETS_EXPORT = "https://docs.google.com/spreadsheets/d/{file_id}/export"
GOOGLE_SHEET_MIME = "application/vnd.google-apps.spreadsheet"

class DriveRequestError(RuntimeError):
    """Drive answered with a non-2xx status (or could not be reached)."""

    def __init__(self, message: str, status_code: Optional[int] = None) -> None:
        super().__init__(message)
        self.status_code = status_code

@dataclass(frozen=True)
class DriveSettings:
    api_key: str = ""
    folder_id: str = ""
    timeout: Optional[float] = None     # no timeout unless configured

    @property
    def configured(self) -> bool:
        return bool(self.api_key and self.folder_id)

@dataclass(frozen=True)
class DriveFile:
    id: str
    name: str
    mime_type: str = ""

    @property
    def is_native_sheet(self) -> bool:
        return self.mime_type == GOOGLE_SHEET_MIME

    @property
    def download_name(self) -> str:
        # native sheets are exported as CSV, the loader picks the parser by suffix
        return f"{self.name}.csv" if self.is_native_sheet else self.name

def settings_from_config(cfg: dict) -> DriveSettings:
    """Read the drive: section; DRIVE_API_KEY / DRIVE_FOLDER_ID take precedence."""
    drv = (cfg or {}).get("drive", {}) or {}
    timeout = drv.get("timeout")
    return DriveSettings(
        api_key=os.getenv("DRIVE_API_KEY") or str(drv.get("api_key") or ""),
        folder_id=os.getenv("DRIVE_FOLDER_ID") or str(drv.get("folder_id") or ""),
        timeout=float(timeout) if timeout is not None else None,
    )

class DriveClient:
    """Lists and downloads spreadsheet files of one Drive folder. No retries."""

    def __init__(self, settings: DriveSettings, session: Optional[requests.Session] = None) -> None:
        if not settings.configured:
            raise ValueError("Please provide both API Key and Folder ID")
        self._settings = settings
        self._session = session or requests.Session()

    def _get(self, url: str, params: dict[str, Any]) -> requests.Response:
        params = {**params, "key": self._settings.api_key}
        try:
            response = self._session.get(url, params=params, timeout=self._settings.timeout)
        except requests.RequestException as exc:
            raise DriveRequestError(f"request failed: {exc}") from exc
        if not response.ok:
            raise DriveRequestError(
                f"HTTP {response.status_code}: {_error_message(response)}",
                status_code=response.status_code,
            )
        return response

    def check_access(self) -> dict:
        """Fetch the folder's id/name; raises DriveRequestError on a bad key or folder."""
        try:
            response = self._get(f"{API_ROOT}/{self._settings.folder_id}", {"fields": "id,name"})
        except DriveRequestError as exc:
            raise DriveRequestError(f"API Test Failed ({exc})", exc.status_code) from exc
        return response.json()

    def list_spreadsheets(self) -> list[DriveFile]:
        query = (f"'{self._settings.folder_id}' in parents and "
                 "(name contains '.xlsx' or name contains '.xls' or name contains '.csv' "
                 f"or mimeType = '{GOOGLE_SHEET_MIME}')")
        payload = self._get(API_ROOT, {"q": query, "fields": "files(id,name,mimeType,size)"}).json()
        if payload.get("error"):
            raise DriveRequestError(f"API Error: {payload['error'].get('message', 'Request failed')}")
        files = [DriveFile(id=f["id"], name=f.get("name", f["id"]), mime_type=f.get("mimeType", ""))
                 for f in payload.get("files") or []]
        _LOG.info("found %d spreadsheet file(s) in folder %s", len(files), self._settings.folder_id)
        return files

    def download(self, item: DriveFile) -> bytes:
        if item.is_native_sheet:
            response = self._get(SHEETS_EXPORT.format(file_id=item.id), {"format": "csv"})
        else:
            response = self._get(f"{API_ROOT}/{item.id}", {"alt": "media"})
        return response.content

def _error_message(response: requests.Response) -> str:
    try:
        data = response.json()
    except ValueError:
        return "Request failed"
    err = data.get("error") if isinstance(data, dict) else None
    if isinstance(err, dict) and err.get("message"):
        return str(err["message"])
    return "Request failed"
