"""
zkaudit Configuration
"""

from __future__ import annotations
import json
import logging
import os
from dataclasses import dataclass, field, asdict
from typing import Dict, List, Optional

from zkaudit.constants import (
    DEFAULT_HASH_TYPE,
    HASH_TYPES,
    PUBLIC_KEY_TREE_HEIGHT,
    RPC_TIMEOUT_SEC,
    WHITELIST_L_SIGNATURE,
    WHITELIST_M_SIGNATURE,
)
from zkaudit.core.types import parse_int, to_hex32
from zkaudit.crypto.discrete_log import SearchBudget
from zkaudit.crypto.elgamal import AuthorityKeys

logger = logging.getLogger(__name__)

ENV_LOG_LEVEL = "ZKAUDIT_LOG_LEVEL"
ENV_HASH_TYPE = "ZKAUDIT_HASH_TYPE"
ENV_RPC_URL = "ZKAUDIT_RPC_URL"


@dataclass
class WhitelistConfig:
    """Whitelist tree and ledger connection."""
    tree_height: int = PUBLIC_KEY_TREE_HEIGHT
    rpc_url: Optional[str] = None
    contract_address: Optional[str] = None
    rpc_timeout_sec: float = RPC_TIMEOUT_SEC
    l_signature: str = WHITELIST_L_SIGNATURE
    m_signature: str = WHITELIST_M_SIGNATURE


@dataclass
class ComplianceConfig:
    """Published authority keys, stored compressed as 0x-hex strings."""
    authority_public_keys: List[str] = field(default_factory=list)


@dataclass
class SearchConfig:
    """Limits for discrete-log recovery."""
    max_guesses: Optional[int] = None
    timeout_sec: Optional[float] = None


@dataclass
class LogConfig:
    """Logging configuration."""
    level: str = "INFO"
    file: Optional[str] = None
    format: str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    max_size_mb: int = 100
    backup_count: int = 5


@dataclass
class ZkAuditConfig:
    """
    Complete library configuration.

    Holds protocol-wide settings only; authority private keys are never
    part of it.
    """
    hash_type: str = DEFAULT_HASH_TYPE

    whitelist: WhitelistConfig = field(default_factory=WhitelistConfig)
    compliance: ComplianceConfig = field(default_factory=ComplianceConfig)
    search: SearchConfig = field(default_factory=SearchConfig)
    log: LogConfig = field(default_factory=LogConfig)

    def validate(self) -> List[str]:
        """
        Validate configuration.

        Returns:
            List of validation errors (empty if valid)
        """
        errors = []

        if self.hash_type not in HASH_TYPES:
            errors.append(f"Unknown hash type: {self.hash_type}")

        if self.whitelist.tree_height < 1:
            errors.append("tree_height must be at least 1")

        if self.whitelist.rpc_url and not self.whitelist.contract_address:
            errors.append("contract_address is required when rpc_url is set")

        if self.whitelist.rpc_timeout_sec <= 0:
            errors.append("rpc_timeout_sec must be positive")

        for key in self.compliance.authority_public_keys:
            try:
                parse_int(key)
            except (TypeError, ValueError):
                errors.append(f"Invalid authority public key: {key!r}")

        if self.search.max_guesses is not None and self.search.max_guesses < 0:
            errors.append("max_guesses cannot be negative")

        if self.search.timeout_sec is not None and self.search.timeout_sec <= 0:
            errors.append("search timeout_sec must be positive")

        if not hasattr(logging, self.log.level.upper()):
            errors.append(f"Unknown log level: {self.log.level}")

        return errors

    def authority_keys(self) -> AuthorityKeys:
        """Build the cipher context from the configured public keys."""
        return AuthorityKeys.from_compressed(self.compliance.authority_public_keys)

    def set_authority_keys(self, authority: AuthorityKeys) -> None:
        self.compliance.authority_public_keys = [
            to_hex32(k) for k in authority.compressed_public_keys()
        ]

    def search_budget(self) -> SearchBudget:
        return SearchBudget(
            max_guesses=self.search.max_guesses,
            timeout_sec=self.search.timeout_sec,
        )

    def to_dict(self) -> dict:
        """Export configuration as dictionary."""
        return {
            "hash_type": self.hash_type,
            "whitelist": asdict(self.whitelist),
            "compliance": asdict(self.compliance),
            "search": asdict(self.search),
            "log": asdict(self.log),
        }

    def save(self, path: str) -> None:
        """Save configuration to file."""
        with open(path, 'w') as f:
            json.dump(self.to_dict(), f, indent=2)

        logger.info(f"Configuration saved to {path}")

    @classmethod
    def from_dict(cls, data: dict) -> ZkAuditConfig:
        config = cls(hash_type=data.get("hash_type", DEFAULT_HASH_TYPE))

        if "whitelist" in data:
            config.whitelist = WhitelistConfig(**data["whitelist"])

        if "compliance" in data:
            config.compliance = ComplianceConfig(**data["compliance"])

        if "search" in data:
            config.search = SearchConfig(**data["search"])

        if "log" in data:
            config.log = LogConfig(**data["log"])

        return config

    @classmethod
    def load(cls, path: str) -> ZkAuditConfig:
        """Load configuration from file."""
        with open(path, 'r') as f:
            data = json.load(f)

        config = cls.from_dict(data)
        logger.info(f"Configuration loaded from {path}")
        return config

    @classmethod
    def from_env(cls, base: Optional[ZkAuditConfig] = None,
                 environ: Optional[Dict[str, str]] = None) -> ZkAuditConfig:
        """
        Apply ZKAUDIT_* environment overrides on top of base.

        Returns a new configuration; base is left unchanged.
        """
        env = os.environ if environ is None else environ
        config = cls.from_dict(base.to_dict()) if base is not None else cls()

        if env.get(ENV_LOG_LEVEL):
            config.log.level = env[ENV_LOG_LEVEL]
        if env.get(ENV_HASH_TYPE):
            config.hash_type = env[ENV_HASH_TYPE]
        if env.get(ENV_RPC_URL):
            config.whitelist.rpc_url = env[ENV_RPC_URL]

        return config


def setup_logging(config: LogConfig) -> None:
    """Configure logging based on config."""
    level = getattr(logging, config.level.upper(), logging.INFO)

    handlers = [logging.StreamHandler()]

    if config.file:
        from logging.handlers import RotatingFileHandler
        file_handler = RotatingFileHandler(
            config.file,
            maxBytes=config.max_size_mb * 1024 * 1024,
            backupCount=config.backup_count,
        )
        handlers.append(file_handler)

    logging.basicConfig(
        level=level,
        format=config.format,
        handlers=handlers,
    )
