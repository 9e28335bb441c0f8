"""IAM token endpoint."""

import structlog

from vpc_file.api.http_client import HttpClient
from vpc_file.core.convert import to_int
from vpc_file.exceptions import APIError, NetworkError, TokenExchangeError
from vpc_file.models.auth import IAMToken

logger = structlog.get_logger(__name__)

TOKEN_PATH = "/identity/token"
APIKEY_GRANT_TYPE = "urn:ibm:params:oauth:grant-type:apikey"


def get_iam_access_token(
    http: HttpClient, api_key: str, *, timeout: float | None = None
) -> IAMToken:
    """
    Exchange an API key for an IAM access token.

    Args:
        http: HTTP client bound to the IAM base URL.
        api_key: IAM API key.
        timeout: Optional per-request timeout in seconds.

    Returns:
        The access token.

    Raises:
        TokenExchangeError: If the token service rejects the key or cannot be reached.
    """
    try:
        response = http.request(
            "POST",
            TOKEN_PATH,
            data={"grant_type": APIKEY_GRANT_TYPE, "apikey": api_key},
            authenticated=False,
            timeout=timeout,
        )
    except APIError as e:
        msg = f"IAM token exchange failed: {e.message}"
        raise TokenExchangeError(msg, status_code=e.status_code) from e
    except NetworkError as e:
        msg = f"IAM token service unreachable: {e.message}"
        raise TokenExchangeError(msg) from e

    access_token = response.get("access_token")
    if not access_token:
        msg = "IAM token response did not contain an access token"
        raise TokenExchangeError(msg)

    logger.debug("IAM access token obtained", expires_in=response.get("expires_in"))
    return IAMToken(
        access_token=access_token,
        token_type=response.get("token_type", "Bearer"),
        expires_in=to_int(response.get("expires_in", 0)),
        account_id=response.get("account_id"),
    )
