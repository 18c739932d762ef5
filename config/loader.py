import json
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Mapping, Optional

from rag.errors import ConfigError

DEFAULT_BASE_URL = "https://models.github.ai/inference"
DEFAULT_MODEL = "openai/text-embedding-3-small"
CREDENTIAL_ENV = "GITHUB_TOKEN"

OLLAMA_DEFAULT_BASE_URL = "http://localhost:11434"
OLLAMA_DEFAULT_MODEL = "nomic-embed-text"

# backend -> (default model, default base_url)
BACKEND_DEFAULTS = {
    "openai": (DEFAULT_MODEL, DEFAULT_BASE_URL),
    "ollama": (OLLAMA_DEFAULT_MODEL, OLLAMA_DEFAULT_BASE_URL),
}


def load_user_config(
    config_path: Optional[str] = None,
    overrides: Optional[Dict[str, Any]] = None,
) -> Dict[str, Any]:
    """
    Load user-facing configuration.
    Priority:
      - if config_path is provided, load that file
      - else config/user_config.json (user copy)
      - else config/user_config.example.json (default)
    If overrides are provided, shallow-merge them on top of the loaded config.
    """
    base_dir = Path(__file__).resolve().parent
    user_cfg = base_dir / "user_config.json"
    example_cfg = base_dir / "user_config.example.json"

    if config_path:
        cfg_path = Path(config_path)
        if not cfg_path.exists():
            raise ConfigError(f"Config file not found: {cfg_path}")
    else:
        cfg_path = user_cfg if user_cfg.exists() else example_cfg

    if not cfg_path.exists():
        cfg = {}
    else:
        with cfg_path.open("r", encoding="utf-8") as f:
            try:
                cfg = json.load(f)
            except json.JSONDecodeError as exc:
                raise ConfigError(f"Invalid JSON in {cfg_path}: {exc}") from exc

    if overrides:
        cfg = {**cfg, **overrides}

    return cfg


@dataclass(frozen=True)
class EmbeddingSettings:
    backend: str
    model: str
    base_url: str
    api_key: Optional[str]
    timeout: float = 60


def load_embedding_settings(
    cfg: Dict[str, Any],
    env: Optional[Mapping[str, str]] = None,
) -> EmbeddingSettings:
    """
    Resolve embedding settings. Environment variables win over the JSON config.
    The OpenAI-compatible backend needs GITHUB_TOKEN; its absence is fatal.
    """
    env = os.environ if env is None else env
    embed_cfg = cfg.get("embedding", {})

    file_backend = (embed_cfg.get("backend") or "openai").lower()
    backend = (env.get("EMBEDDING_BACKEND") or file_backend).lower()
    if backend not in BACKEND_DEFAULTS:
        raise ConfigError(f"Unknown embedding backend: {backend!r} (expected 'openai' or 'ollama')")
    # model/base_url in the file belong to the file's backend
    file_cfg = embed_cfg if file_backend == backend else {}
    default_model, default_base_url = BACKEND_DEFAULTS[backend]
    model = env.get("EMBEDDING_MODEL") or file_cfg.get("model") or default_model
    env_base_url = env.get("EMBEDDING_BASE_URL")
    if backend == "ollama":
        env_base_url = env_base_url or env.get("OLLAMA_EMBED_BASE_URL")
    base_url = env_base_url or file_cfg.get("base_url") or default_base_url
    api_key = env.get(CREDENTIAL_ENV)
    try:
        timeout = float(embed_cfg.get("timeout", 60))
    except (TypeError, ValueError) as exc:
        raise ConfigError(f"embedding.timeout must be a number, got {embed_cfg.get('timeout')!r}") from exc

    if backend == "openai" and not api_key:
        raise ConfigError(f"{CREDENTIAL_ENV} not found in environment variables.")

    return EmbeddingSettings(
        backend=backend,
        model=model,
        base_url=base_url,
        api_key=api_key,
        timeout=timeout,
    )
