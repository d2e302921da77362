from collections.abc import Sequence
from typing import Any

import requests

from flashsets.config import LOGGER
from flashsets.errors import NamingServiceNotConfiguredError, TransientServiceError

SERVICE_NAME = "naming service"


class NamingServiceClient:
    """
    Client for the generative naming service.
    Each call is independent; nothing is cached between suggestions.
    """

    def __init__(
        self,
        base_url: str | None,
        timeout: float = 30,
        session: requests.Session | None = None,
    ) -> None:
        self.base_url = base_url
        self.timeout = timeout
        self.http = session or requests.Session()

    def suggest_name(self, items: Sequence[Any]) -> str:
        """
        Ask the naming service for a collection name.

        Sends {"items": [...]} and expects {"name": "..."} back.
        Raises TransientServiceError for anything other than a usable name.
        """
        if not self.base_url:
            raise NamingServiceNotConfiguredError()

        try:
            response = self.http.post(
                self.base_url, json={"items": list(items)}, timeout=self.timeout
            )
            response.raise_for_status()
            payload = response.json()
        except requests.RequestException as e:
            raise TransientServiceError(SERVICE_NAME, str(e)) from e
        except ValueError as e:
            raise TransientServiceError(SERVICE_NAME, "response was not JSON") from e

        name = payload.get("name") if isinstance(payload, dict) else None
        if not isinstance(name, str) or not name.strip():
            raise TransientServiceError(SERVICE_NAME, "response contained no name")

        LOGGER.debug(f"Naming service suggested '{name}' for {len(items)} items")
        return name.strip()
