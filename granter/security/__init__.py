"""Credential storage and signature verification."""

from .credentials import CredentialStore
from .crypto import KeyPair, generate_keypair, sha256, sign, verify

__all__ = ["CredentialStore", "KeyPair", "generate_keypair", "sha256", "sign", "verify"]
