# src/api_practice/clients/user_validation.py

from __future__ import annotations

import logging
from urllib.parse import quote

import httpx

from ..core.errors import UserValidationUnavailable

logger = logging.getLogger(__name__)


class HttpUserValidationClient:
    """
    User existence check against the remote user service.

    Remote API:
    - GET {base_url}/{userId}
    - 200 OK (JSON body): user exists
    - 404 Not Found: user does not exist
    - anything else: the service cannot answer -> UserValidationUnavailable
    """

    def __init__(self, http: httpx.Client, base_url: str) -> None:
        self._http = http
        self._base_url = base_url.rstrip("/")

    def _user_url(self, user_id: str) -> str:
        return f"{self._base_url}/{quote(user_id, safe='')}"

    def exists_user(self, user_id: str) -> bool:
        url = self._user_url(user_id)
        try:
            resp = self._http.get(url)
        except (httpx.HTTPError, httpx.InvalidURL, UnicodeError) as e:
            # A misconfigured base URL is also "cannot decide".
            logger.warning("User validation request failed user=%s: %s", user_id, e)
            raise UserValidationUnavailable(user_id, e) from e

        if resp.status_code == httpx.codes.NOT_FOUND:
            logger.debug("User validation: user=%s not found", user_id)
            return False

        if resp.status_code != httpx.codes.OK:
            logger.warning(
                "User validation: unexpected status=%s user=%s", resp.status_code, user_id
            )
            raise UserValidationUnavailable(user_id, f"unexpected status {resp.status_code}")

        try:
            resp.json()
        except ValueError as e:
            logger.warning("User validation: malformed response body user=%s", user_id)
            raise UserValidationUnavailable(user_id, "malformed response body") from e

        logger.debug("User validation: user=%s exists", user_id)
        return True
