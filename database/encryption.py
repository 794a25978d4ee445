"""
database/encryption.py
──────────────────────
Cifrado de las descripciones de transacciones usando Fernet
(AES-128-CBC + HMAC-SHA256).

Uso:
    from database.encryption import encrypt, decrypt_or_plain

    cifrado  = encrypt("Pago de servicio: Netflix")
    original = decrypt_or_plain(cifrado)
"""

import logging

from cryptography.fernet import Fernet, InvalidToken
from config import ENCRYPTION_KEY

logger = logging.getLogger(__name__)

# Instancia única del motor de cifrado
_fernet = Fernet(ENCRYPTION_KEY.encode())


def encrypt(plain_text: str) -> str:
    """
    Encripta un texto plano y devuelve el resultado como string.

    Args:
        plain_text: Cadena a encriptar.

    Returns:
        Cadena encriptada en base64 (segura para guardar en DB).
    """
    if not isinstance(plain_text, str):
        raise TypeError("encrypt() espera un string")
    return _fernet.encrypt(plain_text.encode()).decode()


def decrypt(cipher_text: str) -> str:
    """
    Desencripta un texto previamente cifrado con encrypt().

    Raises:
        cryptography.fernet.InvalidToken: si el token es inválido o fue alterado.
    """
    if not isinstance(cipher_text, str):
        raise TypeError("decrypt() espera un string")
    return _fernet.decrypt(cipher_text.encode()).decode()


def decrypt_or_plain(value: str | None) -> str:
    """
    Como decrypt(), pero devuelve el valor tal cual si no está cifrado
    (filas cargadas antes de activar el cifrado).
    """
    if not value:
        return ""
    try:
        return decrypt(value)
    except InvalidToken:
        logger.debug("Descripción sin cifrar, se devuelve en claro")
        return value
