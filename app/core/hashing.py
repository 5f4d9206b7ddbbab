from passlib.context import CryptContext

from app.config import settings

pwd_context = CryptContext(
    schemes=["bcrypt"],
    deprecated="auto",
    bcrypt__rounds=settings.BCRYPT_ROUNDS,
)

class Hasher:
    @staticmethod
    def _truncate_password(password: str) -> str:
        """
        Truncate password to 72 bytes for bcrypt compatibility.
        Ensures we don't break multi-byte UTF-8 characters.
        """
        encoded = password.encode('utf-8')
        if len(encoded) <= 72:
            return password

        truncated = encoded[:72]
        # Drop any incomplete multi-byte character at the end
        while truncated:
            try:
                return truncated.decode('utf-8')
            except UnicodeDecodeError:
                truncated = truncated[:-1]
        return ""

    @staticmethod
    def hash_password(password: str) -> str:
        password = Hasher._truncate_password(password)
        return pwd_context.hash(password)

    @staticmethod
    def verify_password(plain_password: str, hashed_password: str) -> bool:
        plain_password = Hasher._truncate_password(plain_password)
        return pwd_context.verify(plain_password, hashed_password)
