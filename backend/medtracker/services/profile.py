from __future__ import annotations

import requests

PROFILE_EMAIL_PATH = "/v2/accounts/~current/settings/Profile.email"
EMAIL_PERMISSION = "alexa::profile:email:read"


class ProfileLookupError(RuntimeError):
    def __init__(self, message: str, *, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code

    @property
    def permission_missing(self) -> bool:
        return self.status_code in {401, 403}


def fetch_profile_email(api_endpoint: str | None, api_access_token: str | None, *, timeout: float) -> str:
    """Look up the caller's email through the customer profile API."""
    if not api_access_token:
        raise ProfileLookupError("No API access token in request", status_code=403)
    if not api_endpoint:
        raise ProfileLookupError("No API endpoint in request")

    url = f"{api_endpoint.rstrip('/')}{PROFILE_EMAIL_PATH}"
    try:
        resp = requests.get(
            url,
            headers={
                "Accept": "application/json",
                "Authorization": f"Bearer {api_access_token}",
            },
            timeout=timeout,
        )
    except requests.RequestException as exc:
        raise ProfileLookupError(f"Failed to reach profile API: {exc}") from exc

    if resp.status_code != 200:
        raise ProfileLookupError(
            f"Failed to get email with status code {resp.status_code}",
            status_code=resp.status_code,
        )

    try:
        email = resp.json()
    except ValueError as exc:
        raise ProfileLookupError("Profile API returned invalid JSON") from exc
    if not isinstance(email, str) or not email.strip():
        raise ProfileLookupError("Profile API returned no email address")
    return email.strip()
