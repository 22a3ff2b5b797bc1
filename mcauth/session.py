import asyncio

import aiohttp
import requests

from .config import Config
from .exceptions import AuthRejected, NetworkFailure
from .logger import Logger


class SessionAuthClient:
    """Tells the session server that this account is about to join a server.

    https://wiki.vg/Protocol_Encryption#Client
    """

    def __init__(self, config: Config = None, logger: Logger = None):
        self.config = config or Config()
        self.logger = logger or Logger()

    def _headers(self) -> dict:
        return {
            "User-Agent": self.config.user_agent,
            "Connection": "keep-alive",
            "Content-Type": "application/json",
        }

    @staticmethod
    def _body(access_token: str, profile_id: str, profile_name: str, digest: str) -> dict:
        return {
            "accessToken": access_token,
            "selectedProfile": {
                "id": profile_id.replace("-", ""),
                "name": profile_name,
            },
            "serverId": digest,
        }

    def _check(self, status: int, text: str) -> None:
        """Only the status decides; a 204 carries no body, so ``text`` is
        kept for the rejection and not checked on success."""
        if status == 204:  # success
            self.logger.debug("Authenticated account successfully")
            return
        self.logger.warning(f"Session server rejected join: {status}")
        raise AuthRejected(status, text)

    async def join_async(
        self, access_token: str, profile_id: str, profile_name: str, digest: str
    ) -> None:
        """
        Register the upcoming connection with the session server.

        :param access_token: The minecraft access token of the account
        :param profile_id: The uuid of the selected profile, dashes are stripped
        :param profile_name: The name of the selected profile
        :param digest: The server hash from :func:`mcauth.digest.auth_digest`

        :raises AuthRejected: If the server answers with anything but 204
        :raises NetworkFailure: If the server can not be reached
        """
        url = self.config.join_url
        self.logger.debug(f"Sending join request for {profile_name} to {url}")
        timeout = aiohttp.ClientTimeout(total=self.config.timeout)
        try:
            async with aiohttp.ClientSession(timeout=timeout) as httpSession:
                async with httpSession.post(
                    url,
                    json=self._body(access_token, profile_id, profile_name, digest),
                    headers=self._headers(),
                ) as res:
                    status = res.status
                    text = await res.text(errors="replace")
        except (aiohttp.ClientError, asyncio.TimeoutError) as err:
            self.logger.warning(f"Failed to reach session server: {err!r}")
            raise NetworkFailure(f"Failed to reach session server: {err!r}") from err

        self._check(status, text)

    def join(
        self, access_token: str, profile_id: str, profile_name: str, digest: str
    ) -> None:
        """Blocking version of :meth:`join_async`"""
        url = self.config.join_url
        self.logger.debug(f"Sending join request for {profile_name} to {url}")
        try:
            res = requests.post(
                url,
                json=self._body(access_token, profile_id, profile_name, digest),
                headers=self._headers(),
                timeout=self.config.timeout,
            )
        except requests.RequestException as err:
            self.logger.warning(f"Failed to reach session server: {err!r}")
            raise NetworkFailure(f"Failed to reach session server: {err!r}") from err

        self._check(res.status_code, res.text)
