from functools import lru_cache

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.

    Tokens are looked up in a fixed precedence order (HEADLESS_TOKEN, then
    GITHUB_TOKEN, then GH_TOKEN) so a dedicated token can shadow the one a CI
    runner injects by default.
    """

    # Credentials
    HEADLESS_TOKEN: str = ""
    GITHUB_TOKEN: str = ""
    GH_TOKEN: str = ""

    # GitHub endpoints
    GITHUB_API_URL: str = "https://api.github.com"
    GITHUB_SERVER_URL: str = "https://github.com"
    HTTP_TIMEOUT: float = 30.0  # Seconds per remote call

    # GitHub Actions integration
    GITHUB_ACTIONS: bool = False
    GITHUB_OUTPUT: str = ""

    @property
    def token(self) -> str:
        """The first non-empty token in precedence order, or an empty string."""
        for candidate in (self.HEADLESS_TOKEN, self.GITHUB_TOKEN, self.GH_TOKEN):
            if candidate:
                return candidate
        return ""


@lru_cache
def get_settings() -> Settings:
    return Settings()
