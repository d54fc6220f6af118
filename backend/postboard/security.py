"""
PostBoard Backend - Password Hashing
=====================================

What:  bcrypt hashing for stored user passwords.
How:   passlib CryptContext; the work factor comes from BCRYPT_ROUNDS.
Who:   UserService hashes on signup and on upsert (when a password is given).

Every write path hashes, including the unvalidated upsert: skipping field
validation never means storing plaintext.
"""

from passlib.context import CryptContext

from postboard.config import settings

pwd_context = CryptContext(
    schemes=["bcrypt"],
    deprecated="auto",
    bcrypt__rounds=settings.bcrypt_rounds,
)


def hash_password(password: str) -> str:
    return pwd_context.hash(password)


def verify_password(plain_password: str, hashed_password: str) -> bool:
    return pwd_context.verify(plain_password, hashed_password)
