import os
from dataclasses import dataclass
from dotenv import load_dotenv

if not os.getenv("FLY_APP_NAME"):
    load_dotenv(override=False)

class Settings:
    GITHUB_TOKEN = os.getenv("GITHUB_TOKEN", "")
    GITHUB_API_URL = os.getenv("GITHUB_API_URL", "https://api.github.com")
    GITHUB_TIMEOUT_SECONDS = float(os.getenv("GITHUB_TIMEOUT_SECONDS", "15"))
    PORT = int(os.getenv("PORT", "3000"))
    LOG_PREVIEW_CHARS = int(os.getenv("LOG_PREVIEW_CHARS", "500"))


settings = Settings()

@dataclass(frozen=True)
class GitHubConfig:
    token: str
    base_url: str = "https://api.github.com"
    timeout_seconds: float = 15.0

    @classmethod
    def from_settings(cls, s: Settings) -> "GitHubConfig":
        return cls(
            token=s.GITHUB_TOKEN,
            base_url=s.GITHUB_API_URL,
            timeout_seconds=s.GITHUB_TIMEOUT_SECONDS,
        )

def mask_token(token: str) -> str:
    if not token:
        return "<none>"
    return "****" + token[-4:] if len(token) > 8 else "****"
