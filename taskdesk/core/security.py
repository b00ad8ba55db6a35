import secrets

# Use bcrypt directly to avoid passlib/bcrypt version conflicts
import bcrypt


# =====================================================
# Password Hashing Context
# =====================================================
class PasswordContext:
    """
    Simple password hashing utility.
    """

    @staticmethod
    def hash(password: str) -> str:
        """
        Hash a plain-text password using bcrypt.
        """
        return bcrypt.hashpw(
            password.encode("utf-8"),
            bcrypt.gensalt()
        ).decode("utf-8")


# Password context instance
pwd_context = PasswordContext()


# =====================================================
# Reset Tokens
# =====================================================
RESET_TOKEN_BYTES = 32


def generate_reset_token() -> str:
    """
    Generate a password reset token.

    32 bytes from the OS CSPRNG, hex-encoded: 64 lowercase hex characters.
    """
    return secrets.token_hex(RESET_TOKEN_BYTES)


# =====================================================
# Password Helpers
# =====================================================
def get_password_hash(password: str) -> str:
    return pwd_context.hash(password)
