"""Encryption service for securing API service tokens."""

import sys
from typing import Optional
from cryptography.fernet import Fernet
from app.config import settings


class EncryptionService:
    """Service for encrypting and decrypting sensitive data."""

    def __init__(self, encryption_key: Optional[str] = None):
        """Initialize encryption service.

        Args:
            encryption_key: Fernet key; defaults to ``settings.encryption_key``.
        """
        self._key = encryption_key if encryption_key is not None else settings.encryption_key
        self._validate_encryption_key()
        self._fernet = Fernet(self._key.encode())

    def _validate_encryption_key(self) -> None:
        """Validate that encryption key is properly configured.
        
        Raises:
            SystemExit: If encryption key is missing or invalid.
        """
        if not self._key:
            print("ERROR: ENCRYPTION_KEY environment variable is not set.", file=sys.stderr)
            print("API service tokens cannot be stored without a valid encryption key.", file=sys.stderr)
            print("Generate a key with: python -c \"from cryptography.fernet import Fernet; print(Fernet.generate_key().decode())\"", file=sys.stderr)
            sys.exit(1)
        
        try:
            Fernet(self._key.encode())
        except Exception as e:
            print(f"ERROR: Invalid ENCRYPTION_KEY format: {e}", file=sys.stderr)
            print("Generate a valid key with: python -c \"from cryptography.fernet import Fernet; print(Fernet.generate_key().decode())\"", file=sys.stderr)
            sys.exit(1)

    def encrypt(self, plaintext: str) -> str:
        """Encrypt plaintext string.
        
        Args:
            plaintext: The string to encrypt.
            
        Returns:
            The encrypted string (base64 encoded).
        """
        return self._fernet.encrypt(plaintext.encode()).decode()

    def decrypt(self, ciphertext: str) -> str:
        """Decrypt ciphertext string.
        
        Args:
            ciphertext: The encrypted string (base64 encoded).
            
        Returns:
            The decrypted plaintext string.
            
        Raises:
            InvalidToken: If the ciphertext is invalid or corrupted.
        """
        return self._fernet.decrypt(ciphertext.encode()).decode()

    @staticmethod
    def mask(secret: str) -> str:
        """Mask a secret, keeping only the first 3 and last 4 characters."""
        if len(secret) > 10:
            return f"{secret[:3]}{'*' * 15}{secret[-4:]}"
        return "*" * len(secret)
