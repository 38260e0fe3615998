"""Configuration management for the AR.IO Gateway MCP Server"""

import os
from dataclasses import dataclass, field
from typing import Optional, Dict, Any, List
from dotenv import load_dotenv

# Load environment variables
load_dotenv()

# Note: logging is configured by utils.logger.setup_mcp_logging at startup.
# MCP servers must keep stdout clean for JSON-RPC communication

FETCH_MODE_SIZE_CHECKED = "size-checked"
FETCH_MODE_RANGE = "range"
FETCH_MODES = (FETCH_MODE_SIZE_CHECKED, FETCH_MODE_RANGE)

# Published ARIO network process ids
DEFAULT_ARIO_PROCESS_IDS = {
    "mainnet": "qNvAoz0TgcH7DMg8BCVn8jF32QH5L6T29VjHxhHqqGE",
    "testnet": "agYcCFJtrMG6cqMuZfskIkFTGvUPddICmtQSBIoPdiA",
    "devnet": "GaQrvEMKBpkjofgnBi_B3IgIDmY_XYelVLB6GcRGrHc",
}
DEFAULT_ANT_REGISTRY_ID = "i_le_yKKPVstLTDSmkHRqf-wYphMnwB9OhleiTgMkWc"


@dataclass(frozen=True)
class GatewayConfig:
    """AR.IO gateway HTTP configuration"""
    url: str = "https://ardrive.net"
    timeout: float = 30.0

    @property
    def default_headers(self) -> Dict[str, str]:
        """Default headers for JSON requests"""
        return {
            "Content-Type": "application/json",
            "Accept": "application/json",
        }


@dataclass(frozen=True)
class TransactionConfig:
    """Raw transaction fetch behaviour"""
    fetch_mode: str = FETCH_MODE_SIZE_CHECKED
    max_inline_bytes: int = 8192  # size-checked mode
    range_bytes: int = 1000       # range mode


@dataclass(frozen=True)
class AOConfig:
    """AO compute unit configuration for ARIO / ANT reads"""
    cu_url: str = "https://cu.ardrive.io"
    timeout: float = 30.0
    process_ids: Dict[str, str] = field(default_factory=lambda: dict(DEFAULT_ARIO_PROCESS_IDS))
    ant_registry_id: str = DEFAULT_ANT_REGISTRY_ID


@dataclass(frozen=True)
class ParquetConfig:
    """DuckDB / Parquet query configuration"""
    directory: str
    default_limit: int = 100
    view_name: str = "tags"
    database: str = ":memory:"


@dataclass(frozen=True)
class LoggingConfig:
    """Logging configuration"""
    level: str = "INFO"
    file: Optional[str] = None


def _strip_slash(url: str) -> str:
    return url.rstrip("/") if url else url


@dataclass(frozen=True)
class Config:
    """Main configuration, built once at startup and handed to each client"""
    gateway: GatewayConfig
    transaction: TransactionConfig
    ao: AOConfig
    parquet: ParquetConfig
    logging: LoggingConfig

    @classmethod
    def from_env(cls, environ: Optional[Dict[str, str]] = None) -> "Config":
        """Build configuration from environment variables"""
        env = os.environ if environ is None else environ

        gateway = GatewayConfig(
            url=_strip_slash(env.get("AR_IO_GATEWAY_URL", "https://ardrive.net")),
            timeout=float(env.get("GATEWAY_TIMEOUT_SECONDS", "30")),
        )

        transaction = TransactionConfig(
            fetch_mode=env.get("TRANSACTION_FETCH_MODE", FETCH_MODE_SIZE_CHECKED).lower(),
            max_inline_bytes=int(env.get("MAX_TRANSACTION_BYTES", "8192")),
            range_bytes=int(env.get("TRANSACTION_RANGE_BYTES", "1000")),
        )

        process_ids = {
            network: env.get(f"ARIO_{network.upper()}_PROCESS_ID", default_id)
            for network, default_id in DEFAULT_ARIO_PROCESS_IDS.items()
        }
        ao = AOConfig(
            cu_url=_strip_slash(env.get("AO_CU_URL", "https://cu.ardrive.io")),
            timeout=float(env.get("AO_TIMEOUT_SECONDS", "30")),
            process_ids=process_ids,
            ant_registry_id=env.get("ANT_REGISTRY_PROCESS_ID", DEFAULT_ANT_REGISTRY_ID),
        )

        parquet = ParquetConfig(
            directory=env.get("PARQUET_DIRECTORY", os.path.join(os.getcwd(), "data", "parquet", "tags")),
            default_limit=int(env.get("PARQUET_DEFAULT_LIMIT", "100")),
        )

        logging_config = LoggingConfig(
            level=env.get("LOG_LEVEL", "INFO"),
            file=env.get("LOG_FILE") or None,
        )

        return cls(
            gateway=gateway,
            transaction=transaction,
            ao=ao,
            parquet=parquet,
            logging=logging_config,
        )

    def validate(self) -> List[str]:
        """Return a list of configuration problems (empty when valid)"""
        errors = []

        if not self.gateway.url.startswith(("http://", "https://")):
            errors.append("AR_IO_GATEWAY_URL must start with 'http://' or 'https://'")
        if not self.ao.cu_url.startswith(("http://", "https://")):
            errors.append("AO_CU_URL must start with 'http://' or 'https://'")

        if self.transaction.fetch_mode not in FETCH_MODES:
            errors.append(
                f"TRANSACTION_FETCH_MODE must be one of: {', '.join(FETCH_MODES)}"
            )
        if self.transaction.max_inline_bytes <= 0:
            errors.append("MAX_TRANSACTION_BYTES must be positive")
        if self.transaction.range_bytes <= 0:
            errors.append("TRANSACTION_RANGE_BYTES must be positive")
        if self.parquet.default_limit <= 0:
            errors.append("PARQUET_DEFAULT_LIMIT must be positive")

        return errors

    def to_dict(self) -> Dict[str, Any]:
        """Convert configuration to dictionary"""
        return {
            "gateway": {
                "url": self.gateway.url,
                "timeout": self.gateway.timeout,
            },
            "transaction": {
                "fetch_mode": self.transaction.fetch_mode,
                "max_inline_bytes": self.transaction.max_inline_bytes,
                "range_bytes": self.transaction.range_bytes,
            },
            "ao": {
                "cu_url": self.ao.cu_url,
                "process_ids": dict(self.ao.process_ids),
                "ant_registry_id": self.ao.ant_registry_id,
            },
            "parquet": {
                "directory": self.parquet.directory,
                "default_limit": self.parquet.default_limit,
            },
            "logging": {
                "level": self.logging.level,
                "file": self.logging.file,
            },
        }


# Global configuration instance, read once at startup
config = Config.from_env()
