"""Google reCAPTCHA token verification."""

import logging

import httpx

from backend.app.config import settings

logger = logging.getLogger(__name__)


class RecaptchaVerifier:
    def __init__(
        self,
        secret: str,
        verify_url: str,
        timeout: float = 5.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.secret = secret
        self.verify_url = verify_url
        self.timeout = timeout
        self.transport = transport

    async def verify(self, token: str, remote_ip: str | None = None) -> bool:
        """Ask the siteverify endpoint whether ``token`` came from a human.

        Transport and HTTP errors count as a failed verification.
        """
        if not token:
            return False

        payload = {"secret": self.secret, "response": token}
        if remote_ip:
            payload["remoteip"] = remote_ip

        try:
            async with httpx.AsyncClient(transport=self.transport) as client:
                response = await client.post(self.verify_url, data=payload, timeout=self.timeout)
                response.raise_for_status()
                data = response.json()
        except httpx.TimeoutException:
            logger.warning("reCAPTCHA verification timed out")
            return False
        except httpx.HTTPError as e:
            logger.warning("reCAPTCHA verification failed: %s", e)
            return False
        except ValueError:
            logger.warning("reCAPTCHA verification returned a non-JSON body")
            return False

        if not isinstance(data, dict):
            logger.warning("reCAPTCHA verification returned unexpected JSON: %r", data)
            return False

        ok = bool(data.get("success"))
        if not ok:
            logger.info("reCAPTCHA rejected token: %s", data.get("error-codes"))
        return ok


def get_recaptcha() -> RecaptchaVerifier:
    """FastAPI dependency for the recaptcha verifier."""
    return RecaptchaVerifier(
        secret=settings.recaptcha_secret,
        verify_url=settings.recaptcha_verify_url,
        timeout=settings.recaptcha_timeout,
    )
