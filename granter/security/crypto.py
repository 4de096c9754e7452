"""
secp256k1 signing primitives for account transactions.

Provides:
- SHA-256 digest of the transaction sign bytes
- ECDSA verification of compact (r || s) signatures
- Key generation and signing helpers for clients and tests

Public keys are SEC1 encoded points, compressed (33 bytes) or
uncompressed (65 bytes).
"""

import hashlib
from dataclasses import dataclass

from cryptography.exceptions import InvalidSignature
from cryptography.hazmat.primitives import hashes, serialization
from cryptography.hazmat.primitives.asymmetric import ec
from cryptography.hazmat.primitives.asymmetric.utils import (
    Prehashed,
    decode_dss_signature,
    encode_dss_signature,
)

# Order of the secp256k1 group
CURVE_ORDER = 0xFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFEBAAEDCE6AF48A03BBFD25E8CD0364141
SIGNATURE_LENGTH = 64

_ECDSA_SHA256 = ec.ECDSA(Prehashed(hashes.SHA256()))


@dataclass
class KeyPair:
    """Raw secp256k1 keypair: 32-byte secret and compressed public key."""
    private_key: bytes
    public_key: bytes


def sha256(data: bytes) -> bytes:
    return hashlib.sha256(data).digest()


def generate_keypair() -> KeyPair:
    """Generate a fresh secp256k1 keypair."""
    private_key = ec.generate_private_key(ec.SECP256K1())
    secret = private_key.private_numbers().private_value.to_bytes(32, "big")
    return KeyPair(private_key=secret, public_key=_compressed(private_key.public_key()))


def public_key_from_private(private_key: bytes) -> bytes:
    """Derive the compressed public key for a raw 32-byte secret."""
    return _compressed(_load_private(private_key).public_key())


def sign(private_key: bytes, sign_bytes: bytes) -> bytes:
    """
    Sign the SHA-256 digest of ``sign_bytes``.

    Returns the 64-byte compact signature with a low S value, the form
    Cosmos SDK wallets produce.
    """
    der = _load_private(private_key).sign(sha256(sign_bytes), _ECDSA_SHA256)
    r, s = decode_dss_signature(der)
    if s > CURVE_ORDER // 2:
        s = CURVE_ORDER - s
    return r.to_bytes(32, "big") + s.to_bytes(32, "big")


def verify(digest: bytes, signature: bytes, public_key: bytes) -> bool:
    """
    Verify a compact secp256k1 signature over a SHA-256 digest.

    Malformed signatures and keys are reported as a failed verification
    rather than raised.
    """
    if len(digest) != 32 or len(signature) != SIGNATURE_LENGTH:
        return False

    r = int.from_bytes(signature[:32], "big")
    s = int.from_bytes(signature[32:], "big")
    if not (0 < r < CURVE_ORDER and 0 < s < CURVE_ORDER):
        return False

    try:
        key = ec.EllipticCurvePublicKey.from_encoded_point(ec.SECP256K1(), bytes(public_key))
    except ValueError:
        return False

    try:
        key.verify(encode_dss_signature(r, s), digest, _ECDSA_SHA256)
    except InvalidSignature:
        return False
    return True


def _load_private(private_key: bytes) -> ec.EllipticCurvePrivateKey:
    if len(private_key) != 32:
        raise ValueError("secp256k1 private key must be 32 bytes")
    return ec.derive_private_key(int.from_bytes(private_key, "big"), ec.SECP256K1())


def _compressed(public_key: ec.EllipticCurvePublicKey) -> bytes:
    return public_key.public_bytes(
        serialization.Encoding.X962, serialization.PublicFormat.CompressedPoint
    )
