import os
from dataclasses import dataclass
from typing import Any, Optional

import yaml
from dotenv import load_dotenv
from rich.console import Console

console = Console()

DEFAULT_CONFIG: dict[str, Any] = {
    "http": {
        "timeout": 30.0,
        "max_redirects": 5,
        "user_agent": "citelink/0.1 (+https://github.com/unitedstates/legisworks-historical-statutes)",
    },
    "legisworks": {"data_dir": "legisworks-historical-statutes/data"},
    "courtlistener": {"enabled": True},
    "engine": {"max_rounds": 25},
}


@dataclass(frozen=True)
class CourtListenerCredentials:
    """Basic-auth credentials for the CourtListener search API."""
    username: str
    password: str


@dataclass(frozen=True)
class Settings:
    """Resolved runtime settings shared by the providers and the engine."""

    data_dir: str = "legisworks-historical-statutes/data"
    http_timeout: float = 30.0
    max_redirects: int = 5
    user_agent: str = "citelink/0.1"
    max_rounds: int = 25
    courtlistener: Optional[CourtListenerCredentials] = None


def load_config(config_path: str = "config.yaml") -> dict[str, Any]:
    """
    From config.yaml

    Args:
        config_path: Path to config file (default: config.yaml)

    Returns:
        Configuration dictionary
    """
    try:
        with open(config_path, "r") as f:
            return yaml.safe_load(f) or DEFAULT_CONFIG
    except FileNotFoundError:
        console.print(f"[yellow]Warning: {config_path} not found. Using default config.[/yellow]")
        return DEFAULT_CONFIG


def get_courtlistener_credentials() -> Optional[CourtListenerCredentials]:
    username = os.getenv("COURTLISTENER_USERNAME", "")
    password = os.getenv("COURTLISTENER_PASSWORD", "")
    if not username or not password:
        return None
    return CourtListenerCredentials(username=username, password=password)


def get_settings(config: Optional[dict[str, Any]] = None) -> Settings:
    """
    Build Settings from a config dictionary and the environment.

    Environment variables (a .env file is honoured) take precedence:
    LEGISWORKS_DATA_DIR, COURTLISTENER_USERNAME, COURTLISTENER_PASSWORD.
    """
    load_dotenv()
    config = config or DEFAULT_CONFIG

    http = config.get("http", {})
    legisworks = config.get("legisworks", {})
    engine = config.get("engine", {})

    credentials = None
    if config.get("courtlistener", {}).get("enabled", True):
        credentials = get_courtlistener_credentials()

    return Settings(
        data_dir=os.getenv("LEGISWORKS_DATA_DIR") or legisworks.get("data_dir", Settings.data_dir),
        http_timeout=float(http.get("timeout", Settings.http_timeout)),
        max_redirects=int(http.get("max_redirects", Settings.max_redirects)),
        user_agent=http.get("user_agent", Settings.user_agent),
        max_rounds=int(engine.get("max_rounds", Settings.max_rounds)),
        courtlistener=credentials,
    )
