#!/usr/bin/env python3
"""
HTTP report upload for Activity Ledger.
Posts the current totals and today's intervals to a configured endpoint.
"""

import platform
import socket
from datetime import datetime, timezone
from typing import Dict, List, Optional, Tuple

import requests

REPORT_SOURCE = "activity-ledger"
REPORT_VERSION = "1.0"


class DeviceIdentifier:
    """Names the machine a report comes from."""

    @staticmethod
    def get_device_name() -> str:
        try:
            hostname = socket.gethostname()
            if hostname.endswith(".local"):
                hostname = hostname[:-6]

            if not hostname or hostname in ["localhost", "unknown"]:
                hostname = platform.node()
                if hostname.endswith(".local"):
                    hostname = hostname[:-6]

            return hostname
        except OSError:
            return f"{platform.system().lower()}-{platform.machine()}"


class ReportPayloadBuilder:
    """Builds the JSON body of a report upload."""

    def __init__(self):
        self.device_identifier = DeviceIdentifier()

    def create_payload(
        self,
        times: List[Tuple[str, int]],
        today: List[Tuple[str, int, Optional[int]]],
        now: Optional[datetime] = None,
    ) -> Dict:
        now = now or datetime.now(timezone.utc)
        return {
            "timestamp": now.isoformat(),
            "date": now.strftime("%Y-%m-%d"),
            "totals": {name: seconds for name, seconds in times},
            "today": [
                {"name": name, "start_time": start, "end_time": end}
                for name, start, end in today
            ],
            "source": REPORT_SOURCE,
            "device": self.device_identifier.get_device_name(),
            "version": REPORT_VERSION,
        }


class ReportSyncClient:
    """HTTP client for uploading activity reports."""

    def __init__(self, endpoint: str, auth_token: str = "", timeout: float = 30):
        self.endpoint = endpoint
        self.auth_token = auth_token
        self.timeout = timeout
        self.payload_builder = ReportPayloadBuilder()

    def _get_headers(self) -> Dict[str, str]:
        headers = {"Content-Type": "application/json"}
        if self.auth_token:
            headers["Authorization"] = f"Bearer {self.auth_token}"
        return headers

    def sync_report(
        self,
        times: List[Tuple[str, int]],
        today: List[Tuple[str, int, Optional[int]]],
    ) -> bool:
        """Upload one report. Returns True when the endpoint accepted it."""
        if not self.endpoint:
            print("Error: No sync endpoint configured.")
            return False

        payload = self.payload_builder.create_payload(times, today)

        try:
            response = requests.post(
                self.endpoint,
                json=payload,
                headers=self._get_headers(),
                timeout=self.timeout,
            )
        except requests.exceptions.RequestException as e:
            print(f"[FAIL] Network error uploading report: {e}")
            return False

        if response.status_code in [200, 201]:
            print(f"[OK] Uploaded report with {len(times)} activities")
            return True

        print(
            f"[FAIL] Report upload failed: "
            f"HTTP {response.status_code} - {response.text}"
        )
        return False
