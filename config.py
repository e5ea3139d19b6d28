"""Configuration helpers: read from environment with sensible defaults."""
import os


def _parse_bool(s: str, default: bool) -> bool:
    if s is None:
        return default
    return s.strip().lower() in ("1", "true", "yes", "on")


DEFAULT_RPC = "https://api.mainnet-beta.solana.com"

# Solana RPC endpoint used for the on-chain metadata account lookup
SOLANA_RPC_URL: str = os.getenv("SOLANA_RPC_URL", DEFAULT_RPC)

# Optional DAS-capable endpoint (e.g. Helius). When unset the DAS source is not used.
DAS_RPC_URL: str = os.getenv("DAS_RPC_URL", "")

# Legacy registry list used as a fallback when a mint has no metadata account
DEFAULT_TOKEN_LIST_URL = (
    "https://raw.githubusercontent.com/solana-labs/token-list/main/src/tokens/solana.tokenlist.json"
)
TOKEN_LIST_URL: str = os.getenv("TOKEN_LIST_URL", DEFAULT_TOKEN_LIST_URL)
USE_TOKEN_LIST: bool = _parse_bool(os.getenv("USE_TOKEN_LIST"), True)

# Seconds; applied to every outbound HTTP request (logo, token list, JSON-RPC)
HTTP_TIMEOUT: float = 10.0
env_timeout = os.getenv("HTTP_TIMEOUT")
if env_timeout:
    try:
        HTTP_TIMEOUT = float(env_timeout)
    except ValueError:
        HTTP_TIMEOUT = 10.0


# Logging level
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
