"""
Username + API key authentication.

The API authenticates every request with a username and an API key, sent
either as query parameters (``?username=...&api_key=...``) or as an
``Authorization: ApiKey <username>:<api_key>`` header.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, SecretStr

from .base import AuthLocation, AuthMethod, AuthResult


class APIKeyConfig(BaseModel):
    """Configuration for API key authentication."""

    username: str = Field(description="Account username")
    api_key: SecretStr = Field(description="The API key value")
    location: AuthLocation = Field(
        default=AuthLocation.QUERY, description="Where to place the credentials"
    )

    model_config = ConfigDict(use_enum_values=True)


class APIKeyAuth(AuthMethod):
    """
    API key authentication method.

    Example:
        ```python
        auth = APIKeyAuth(APIKeyConfig(username="alice", api_key="abc123"))
        result = await auth.get_auth_data()
        # result.params == {"username": "alice", "api_key": "abc123"}
        ```
    """

    def __init__(self, config: APIKeyConfig):
        """
        Initialize API key authentication.

        Args:
            config: API key configuration
        """
        super().__init__()
        self.config = config

    async def authenticate(self) -> AuthResult:
        """
        Build the credentials for the configured location.

        Returns:
            AuthResult carrying query params or headers, or a failed result
            when the username or key is blank
        """
        api_key = self.config.api_key.get_secret_value()
        if not self.config.username or not api_key:
            return AuthResult(
                success=False, error="Username and API key are required"
            )

        if self.config.location == AuthLocation.HEADER:
            return AuthResult(
                success=True,
                headers={"Authorization": f"ApiKey {self.config.username}:{api_key}"},
            )
        return AuthResult(
            success=True,
            params={"username": self.config.username, "api_key": api_key},
        )

    def validate_config(self) -> bool:
        """Whether both username and API key are non-blank."""
        return bool(
            self.config.username.strip()
            and self.config.api_key.get_secret_value().strip()
        )
