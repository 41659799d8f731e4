"""OpenAI-compatible backend for english_optimizer.

Works with OpenAI itself, Zhipu GLM (open.bigmodel.cn) and any other
endpoint that speaks the /chat/completions protocol.
"""

from __future__ import annotations

import logging
import time
from typing import Any

import httpx

from english_optimizer.backends.base import GENERATION_TIMEOUT, Provider
from english_optimizer.errors import (
    ApiError,
    AuthError,
    BillingError,
    InvalidResponseError,
    OptimizerError,
    RateLimitError,
    TransportError,
)

logger = logging.getLogger(__name__)

PROBE_TIMEOUT = 10.0

# Vendor error codes meaning "top up your account", with where to do it
BILLING_SIGNALS = {
    "1113": (
        "GLM account balance is insufficient.",
        "https://open.bigmodel.cn/usercenter/finance",
    ),
}


def _error_body(response: httpx.Response) -> Any:
    try:
        return response.json()
    except ValueError:
        return response.text


def billing_error_for(response: httpx.Response) -> BillingError | None:
    """Return a BillingError if the error body carries a balance signal."""
    body = _error_body(response)
    if not isinstance(body, dict) or not isinstance(body.get("error"), dict):
        return None
    code = str(body["error"].get("code", ""))
    if code not in BILLING_SIGNALS:
        return None
    message, url = BILLING_SIGNALS[code]
    return BillingError(
        f"{message} Please recharge your account at {url}",
        remediation_url=url,
        status=response.status_code,
    )


def classify_http_error(exc: httpx.HTTPError) -> OptimizerError:
    """Map an httpx failure onto the error taxonomy.

    Order matters: a balance signal wins over the status code.
    """
    if isinstance(exc, httpx.HTTPStatusError):
        response = exc.response
        billing = billing_error_for(response)
        if billing is not None:
            return billing
        status = response.status_code
        if status == 401:
            return AuthError()
        if status == 429:
            return RateLimitError()
        return ApiError(f"API error ({status}): {_describe(response)}", status=status)
    return TransportError(f"API request failed: {exc}")


def _describe(response: httpx.Response) -> str:
    body = _error_body(response)
    if isinstance(body, dict):
        error = body.get("error")
        if isinstance(error, dict) and error.get("message"):
            return str(error["message"])
        if isinstance(error, str):
            return error
    return response.reason_phrase or str(body)[:200]


class OpenAICompatProvider(Provider):
    """Chat-completions backend authenticated with a bearer token."""

    def __init__(
        self,
        api_key: str,
        base_url: str = "https://api.openai.com/v1",
        model: str = "gpt-3.5-turbo",
        vendor: str = "openai",
        timeout: float = GENERATION_TIMEOUT,
        temperature: float = 0.7,
        max_tokens: int = 2000,
    ):
        super().__init__(model)
        self.api_key = api_key
        self.base_url = base_url.rstrip("/")
        self.vendor = vendor
        self.name = vendor
        self.timeout = timeout
        self.temperature = temperature
        self.max_tokens = max_tokens

        self.headers = {
            "Authorization": f"Bearer {api_key}",
            "Content-Type": "application/json",
        }

    async def complete(self, prompt: str) -> str:
        payload = {
            "model": self.model,
            "messages": [{"role": "user", "content": prompt}],
            "temperature": self.temperature,
            "max_tokens": self.max_tokens,
        }

        url = f"{self.base_url}/chat/completions"
        started = time.monotonic()
        try:
            async with httpx.AsyncClient(timeout=self.timeout) as client:
                response = await client.post(url, json=payload, headers=self.headers)
                response.raise_for_status()
                data = response.json()
        except httpx.HTTPError as e:
            raise classify_http_error(e) from e
        except httpx.InvalidURL as e:
            raise TransportError(f"API request failed: {e}") from e
        except ValueError as e:
            raise InvalidResponseError("Invalid response from API") from e
        finally:
            logger.debug("POST %s took %.2fs", url, time.monotonic() - started)

        # Parse OpenAI response format
        choices = data.get("choices") if isinstance(data, dict) else None
        if not isinstance(choices, list) or not choices or not isinstance(choices[0], dict):
            raise InvalidResponseError("Invalid response from API")
        message = choices[0].get("message")
        if not isinstance(message, dict):
            raise InvalidResponseError("Invalid response from API")
        content = message.get("content")
        if not isinstance(content, str) or not content.strip():
            raise InvalidResponseError("Invalid response from API")
        return content.strip()

    async def is_available(self) -> bool:
        """Probe with a tiny real request; these APIs have no health endpoint.

        Raises BillingError when the account is out of balance, since that
        needs the operator's attention rather than a retry.
        """
        if not self.api_key:
            logger.warning("No API key configured for %s", self.vendor)
            return False

        payload = {
            "model": self.model,
            "messages": [{"role": "user", "content": "test"}],
            "max_tokens": 5,
        }
        try:
            async with httpx.AsyncClient(timeout=PROBE_TIMEOUT) as client:
                response = await client.post(
                    f"{self.base_url}/chat/completions",
                    json=payload,
                    headers=self.headers,
                )
        except (httpx.HTTPError, httpx.InvalidURL) as e:
            logger.warning("No response from API at %s: %s", self.base_url, e)
            return False

        if response.status_code == 200:
            return True

        logger.warning(
            "API connection failed with status %s: %s",
            response.status_code,
            response.text[:500],
        )
        billing = billing_error_for(response)
        if billing is not None:
            raise billing
        return False
