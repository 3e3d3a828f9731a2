import json
import os
import time
from dataclasses import dataclass
from typing import Any, Dict, Optional

from utils.logger import log_warning


DEFAULT_TOKEN_CACHE_PATH = os.path.join("data", "spotify_client_token.json")


@dataclass(frozen=True)
class TokenInfo:
    """Access token issued by the accounts service."""

    access_token: str
    token_type: str
    expires_at: float
    scope: Optional[str] = None

    @staticmethod
    def from_token_response(payload: Dict[str, Any], *, now: Optional[float] = None) -> "TokenInfo":
        """Convert the /api/token JSON (access_token, token_type, expires_in) into TokenInfo."""

        now_ts = float(time.time() if now is None else now)
        expires_in = float(payload.get("expires_in", 0))

        return TokenInfo(
            access_token=str(payload.get("access_token", "")),
            token_type=str(payload.get("token_type", "Bearer")),
            expires_at=now_ts + expires_in,
            scope=payload.get("scope"),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "access_token": self.access_token,
            "token_type": self.token_type,
            "expires_at": self.expires_at,
            "scope": self.scope,
        }

    def is_expired(self, *, skew_seconds: int = 60, now: Optional[float] = None) -> bool:
        now_ts = float(time.time() if now is None else now)
        return now_ts >= float(self.expires_at) - float(skew_seconds)


class TokenManager:
    """Persists a client-credentials token between runs."""

    def __init__(self, *, cache_path: str = DEFAULT_TOKEN_CACHE_PATH):
        self.cache_path = cache_path

    def load(self) -> Optional[TokenInfo]:
        if not os.path.exists(self.cache_path):
            return None

        try:
            with open(self.cache_path, "r", encoding="utf-8") as f:
                data = json.load(f)
            return TokenInfo(
                access_token=str(data["access_token"]),
                token_type=str(data.get("token_type", "Bearer")),
                expires_at=float(data.get("expires_at", 0)),
                scope=data.get("scope"),
            )
        except (OSError, ValueError, KeyError, TypeError, AttributeError) as e:
            log_warning(f"Ignoring unreadable token cache {self.cache_path}: {e}")
            return None

    def save(self, token: TokenInfo) -> bool:
        try:
            cache_dir = os.path.dirname(self.cache_path)
            if cache_dir:
                os.makedirs(cache_dir, exist_ok=True)
            with open(self.cache_path, "w", encoding="utf-8") as f:
                json.dump(token.to_dict(), f, indent=2)
            return True
        except OSError as e:
            log_warning(f"Could not write token cache {self.cache_path}: {e}")
            return False

    def clear(self) -> bool:
        try:
            if os.path.exists(self.cache_path):
                os.remove(self.cache_path)
            return True
        except OSError:
            return False
