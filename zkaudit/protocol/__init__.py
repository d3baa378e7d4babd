"""
zkaudit Protocol Glue

Proof public-input preparation and event-log decryption.
"""

from zkaudit.protocol.inputs import (
    Element,
    format_inputs_for_zksnark,
    flatten_deep,
    encrypt_transfer,
    encrypt_burn,
    transfer_public_inputs,
    burn_public_inputs,
    public_input_hash,
)
from zkaudit.protocol.events import decrypt_event_log, public_inputs_from_event

__all__ = [
    "Element",
    "format_inputs_for_zksnark",
    "flatten_deep",
    "encrypt_transfer",
    "encrypt_burn",
    "transfer_public_inputs",
    "burn_public_inputs",
    "public_input_hash",
    "decrypt_event_log",
    "public_inputs_from_event",
]
