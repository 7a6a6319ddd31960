"""Encryption utilities for sensitive data."""

import base64
import binascii
import os

from cryptography.exceptions import InvalidTag
from cryptography.hazmat.primitives.ciphers.aead import AESGCM

from slides_server.common.exception import errors

KEY_SIZE = 32
NONCE_SIZE = 12


class EncryptionManager:
    """AES-256-GCM encryption for credentials stored at rest, such as provider API keys.

    Ciphertexts are ``base64(nonce || ciphertext || tag)`` with a random 12 byte nonce.
    """

    def __init__(self, secret: str):
        self.aesgcm = AESGCM(self.derive_key(secret))

    @staticmethod
    def derive_key(secret: str) -> bytes:
        """Zero-pad or truncate the configured secret to a 32 byte key."""
        raw = secret.encode('utf-8')[:KEY_SIZE]
        return raw.ljust(KEY_SIZE, b'\0')

    def encrypt(self, plaintext: str) -> str:
        """Encrypt a plaintext string.

        Args:
            plaintext: The string to encrypt

        Returns:
            Base64 encoded nonce and ciphertext
        """
        nonce = os.urandom(NONCE_SIZE)
        ciphertext = self.aesgcm.encrypt(nonce, plaintext.encode('utf-8'), None)
        return base64.b64encode(nonce + ciphertext).decode('ascii')

    def decrypt(self, encrypted_text: str) -> str:
        """Decrypt a string produced by :meth:`encrypt`.

        Raises:
            ServerError: If the payload is not valid base64, is too short, fails
                authentication or is not UTF-8
        """
        try:
            combined = base64.b64decode(encrypted_text, validate=True)
        except (binascii.Error, ValueError) as e:
            raise errors.ServerError(msg=f'Base64 decode failed: {e}')

        if len(combined) < NONCE_SIZE:
            raise errors.ServerError(msg='Invalid encrypted data')

        nonce, ciphertext = combined[:NONCE_SIZE], combined[NONCE_SIZE:]
        try:
            plaintext = self.aesgcm.decrypt(nonce, ciphertext, None)
        except InvalidTag:
            raise errors.ServerError(msg='Decryption failed')

        try:
            return plaintext.decode('utf-8')
        except UnicodeDecodeError as e:
            raise errors.ServerError(msg=f'UTF-8 decode failed: {e}')
