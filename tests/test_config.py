"""
zkaudit Configuration Tests
"""

import logging

from zkaudit.config import (
    ComplianceConfig,
    LogConfig,
    SearchConfig,
    WhitelistConfig,
    ZkAuditConfig,
    setup_logging,
)


class TestValidate:
    """Tests for configuration validation."""

    def test_defaults_valid(self):
        """Test that the default configuration passes."""
        config = ZkAuditConfig()
        assert config.validate() == []
        assert config.hash_type == "sha"
        assert config.whitelist.tree_height == 32

    def test_unknown_hash_type(self):
        """Test an unsupported hash back-end."""
        config = ZkAuditConfig(hash_type="md5")
        assert any("hash type" in e for e in config.validate())

    def test_rpc_needs_contract(self):
        """Test that an RPC URL requires a contract address."""
        config = ZkAuditConfig(whitelist=WhitelistConfig(rpc_url="http://localhost:8545"))
        assert any("contract_address" in e for e in config.validate())

    def test_bad_values(self):
        """Test several invalid fields at once."""
        config = ZkAuditConfig(
            whitelist=WhitelistConfig(tree_height=0, rpc_timeout_sec=0),
            compliance=ComplianceConfig(authority_public_keys=["0xzz"]),
            search=SearchConfig(max_guesses=-1, timeout_sec=0),
            log=LogConfig(level="LOUD"),
        )
        assert len(config.validate()) == 6


class TestPersistence:
    """Tests for saving and loading."""

    def test_save_load(self, tmp_path, authority):
        """Test a JSON round trip."""
        config = ZkAuditConfig(hash_type="mimc")
        config.whitelist.rpc_url = "http://localhost:8545"
        config.whitelist.contract_address = "0xabc"
        config.search.max_guesses = 1_000_000
        config.set_authority_keys(authority)

        path = tmp_path / "zkaudit.json"
        config.save(str(path))
        loaded = ZkAuditConfig.load(str(path))

        assert loaded.to_dict() == config.to_dict()
        assert loaded.authority_keys().public_keys == authority.public_keys

    def test_partial_dict(self):
        """Test that missing sections fall back to defaults."""
        config = ZkAuditConfig.from_dict({"search": {"timeout_sec": 5.0}})
        assert config.search.timeout_sec == 5.0
        assert config.whitelist.tree_height == 32

    def test_authority_keys_are_public_only(self, authority):
        """Test that loaded authorities carry no private keys."""
        config = ZkAuditConfig()
        config.set_authority_keys(authority)
        assert not config.authority_keys().has_private_keys

    def test_search_budget(self):
        """Test budget construction."""
        config = ZkAuditConfig(search=SearchConfig(max_guesses=7, timeout_sec=1.5))
        budget = config.search_budget()
        assert budget.max_guesses == 7
        assert budget.timeout_sec == 1.5


class TestEnvironment:
    """Tests for environment overrides."""

    def test_overrides(self):
        """Test ZKAUDIT_* variables."""
        config = ZkAuditConfig.from_env(environ={
            "ZKAUDIT_LOG_LEVEL": "DEBUG",
            "ZKAUDIT_HASH_TYPE": "mimc",
            "ZKAUDIT_RPC_URL": "http://node:8545",
        })
        assert config.log.level == "DEBUG"
        assert config.hash_type == "mimc"
        assert config.whitelist.rpc_url == "http://node:8545"

    def test_base_left_unchanged(self):
        """Test that overrides apply to a copy of the base."""
        base = ZkAuditConfig()
        config = ZkAuditConfig.from_env(base, environ={
            "ZKAUDIT_HASH_TYPE": "mimc",
            "ZKAUDIT_RPC_URL": "http://node:8545",
        })
        assert config is not base
        assert config.hash_type == "mimc"
        assert base.hash_type == "sha"
        assert base.whitelist.rpc_url is None

    def test_no_overrides(self):
        """Test that an empty environment changes nothing."""
        base = ZkAuditConfig(hash_type="mimc")
        assert ZkAuditConfig.from_env(base, environ={}).hash_type == "mimc"


class TestSetupLogging:
    """Tests for logging setup."""

    def test_file_handler(self, tmp_path):
        """Test logging to a rotating file."""
        log_file = tmp_path / "zkaudit.log"
        setup_logging(LogConfig(level="DEBUG", file=str(log_file)))
        logging.getLogger("zkaudit.test").info("hello")
        for handler in logging.getLogger().handlers:
            handler.flush()
        assert log_file.exists()
