"""
Password hashing for member and admin accounts
"""
from typing import Optional, Tuple

from passlib.context import CryptContext

# Argon2 for new hashes; anything else is re-hashed on the next login
pwd_context = CryptContext(schemes=["argon2"], deprecated="auto")


class PasswordManager:

    @staticmethod
    def hash_password(password: str) -> str:
        return pwd_context.hash(password)

    @staticmethod
    def verify_and_upgrade(plain_password: str, hashed_password: Optional[str]) -> Tuple[bool, Optional[str]]:
        """
        Verify ``plain_password`` and return ``(valid, new_hash)``.
        ``new_hash`` is set only when the stored hash uses outdated parameters.
        """
        if not hashed_password:
            return False, None
        return pwd_context.verify_and_update(plain_password, hashed_password)
