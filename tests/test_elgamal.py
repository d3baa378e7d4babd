"""
zkaudit Multi-Authority ElGamal Tests
"""

import pytest

from zkaudit.core.types import Point
from zkaudit.crypto.curve import GENERATOR, add, scalar_mult, sum_points
from zkaudit.crypto.elgamal import (
    AuthorityKeys,
    decrypt,
    encrypt,
    generate_authority_keys,
    random_secret,
)
from zkaudit.errors import (
    AuthorityKeysNotSetError,
    ErrorCode,
    InvalidCiphertextError,
    InvalidParameterError,
    InvalidPointError,
)


class TestAuthorityKeys:
    """Tests for the authority key context."""

    def test_from_private_keys(self, authority, authority_secrets):
        """Test public key derivation."""
        assert len(authority.public_keys) == 3
        for key, secret in zip(authority.public_keys, authority_secrets):
            assert key == scalar_mult(secret)
        assert authority.has_private_keys

    def test_combined_key(self, authority, authority_secrets):
        """Test that the combined key is the sum of the public keys."""
        assert authority.combined_public_key == sum_points(authority.public_keys)
        assert authority.combined_public_key == scalar_mult(sum(authority_secrets))

    def test_empty_key_set_rejected(self):
        """Test that at least one authority is needed."""
        with pytest.raises(InvalidParameterError):
            AuthorityKeys([])

    def test_off_curve_key_rejected(self):
        """Test that public keys must be curve points."""
        with pytest.raises(InvalidPointError):
            AuthorityKeys([GENERATOR, Point(1, 1)])

    def test_compressed_round_trip(self, authority):
        """Test loading published compressed keys."""
        loaded = AuthorityKeys.from_compressed(authority.compressed_public_keys())
        assert loaded.public_keys == authority.public_keys
        assert not loaded.has_private_keys

    def test_clear_private_keys(self, authority):
        """Test dropping the private keys."""
        authority.clear_private_keys()
        assert not authority.has_private_keys

    def test_negative_private_key_rejected(self, public_authority):
        """Test that private keys must be non-negative."""
        with pytest.raises(InvalidParameterError):
            public_authority.set_private_keys([1, -2, 3])

    def test_generate_authority_keys(self):
        """Test fresh key generation."""
        authority, secrets = generate_authority_keys(2)
        assert len(secrets) == 2
        assert not authority.has_private_keys
        assert authority.public_keys == tuple(scalar_mult(s) for s in secrets)

    def test_generate_requires_count(self):
        """Test that zero authorities is rejected."""
        with pytest.raises(InvalidParameterError):
            generate_authority_keys(0)


class TestEncryptDecrypt:
    """Tests for encryption and decryption."""

    def test_decrypt_inverts_encrypt(self, authority, rng):
        """Test that decryption yields m * G for each message."""
        messages = [rng.randrange(0, 2 ** 128) for _ in range(3)]
        ciphertext = authority.encrypt(random_secret(), messages)
        assert authority.decrypt(ciphertext) == [scalar_mult(m) for m in messages]

    def test_ciphertext_shape(self, authority):
        """Test R = rG and Ci = miG + rK."""
        r = 0xC0FFEE
        ciphertext = authority.encrypt(r, [5, 6])
        mask = scalar_mult(r, authority.combined_public_key)
        assert len(ciphertext) == 3
        assert ciphertext[0] == scalar_mult(r)
        assert ciphertext[1] == add(scalar_mult(5), mask)
        assert ciphertext[2] == add(scalar_mult(6), mask)

    def test_deterministic_for_fixed_randomness(self, authority):
        """Test that a fixed r gives a fixed ciphertext."""
        assert authority.encrypt(77, [1, 2]) == authority.encrypt(77, [1, 2])

    def test_fresh_randomness(self, authority):
        """Test that omitting r draws a new one per call."""
        a = authority.encrypt(None, [1])
        b = authority.encrypt(None, [1])
        assert a[0] != b[0]

    def test_hex_messages(self, authority):
        """Test hex-string plaintexts."""
        ciphertext = authority.encrypt(9, ["0x2a"])
        assert authority.decrypt(ciphertext) == [scalar_mult(42)]

    def test_public_only_context_encrypts(self, authority, public_authority):
        """Test that transactors encrypt without private keys."""
        ciphertext = public_authority.encrypt(1234, [500])
        assert authority.decrypt(ciphertext) == [scalar_mult(500)]

    def test_module_functions(self, authority):
        """Test the module-level encrypt/decrypt wrappers."""
        ciphertext = encrypt(55, [3], authority)
        assert decrypt(ciphertext, authority) == [scalar_mult(3)]

    def test_negative_message_rejected(self, authority):
        """Test that plaintexts must be non-negative."""
        with pytest.raises(InvalidParameterError):
            authority.encrypt(5, [-1])

    def test_empty_message_list(self, authority):
        """Test encrypting no messages."""
        ciphertext = authority.encrypt(3, [])
        assert len(ciphertext) == 1
        assert authority.decrypt(ciphertext) == []


class TestKeyHandling:
    """Tests for decryption key state."""

    def test_decrypt_without_keys(self, public_authority):
        """Test that decrypting before keys are set raises."""
        ciphertext = public_authority.encrypt(5, [1])
        with pytest.raises(AuthorityKeysNotSetError) as exc_info:
            public_authority.decrypt(ciphertext)
        assert exc_info.value.code == ErrorCode.AUTHORITY_KEYS_NOT_SET

    def test_set_keys_later(self, public_authority, authority_secrets):
        """Test setting keys on a public-only context."""
        ciphertext = public_authority.encrypt(5, [21])
        public_authority.set_private_keys(authority_secrets)
        assert public_authority.decrypt(ciphertext) == [scalar_mult(21)]

    def test_missing_authority_locks_out(self, public_authority, authority_secrets):
        """Test that a strict subset of keys does not recover m * G."""
        ciphertext = public_authority.encrypt(5, [21])
        public_authority.set_private_keys(authority_secrets[:2])
        assert public_authority.decrypt(ciphertext) != [scalar_mult(21)]

    def test_wrong_keys(self, public_authority, authority_secrets):
        """Test that a wrong key set does not recover m * G."""
        ciphertext = public_authority.encrypt(5, [21])
        public_authority.set_private_keys([s + 1 for s in authority_secrets])
        assert public_authority.decrypt(ciphertext) != [scalar_mult(21)]

    def test_contexts_are_independent(self, authority):
        """Test that two contexts keep their own key state."""
        other = AuthorityKeys(authority.public_keys)
        ciphertext = authority.encrypt(8, [4])
        assert authority.decrypt(ciphertext) == [scalar_mult(4)]
        with pytest.raises(AuthorityKeysNotSetError):
            other.decrypt(ciphertext)

    def test_empty_ciphertext(self, authority):
        """Test that a ciphertext needs its ephemeral point."""
        with pytest.raises(InvalidCiphertextError):
            authority.decrypt([])

    def test_off_curve_ciphertext(self, authority):
        """Test that ciphertext points must lie on the curve."""
        with pytest.raises(InvalidPointError):
            authority.decrypt([GENERATOR, Point(2, 3)])


class TestRandomSecret:
    """Tests for ephemeral secret generation."""

    def test_range(self):
        """Test that secrets fit in 31 bytes."""
        for _ in range(20):
            assert 0 <= random_secret() < 2 ** 248

    def test_invalid_size(self):
        """Test that zero bytes is rejected."""
        with pytest.raises(InvalidParameterError):
            random_secret(0)
