"""Shared constants."""

# bcrypt only looks at the first 72 bytes of its input; longer passwords are rejected
MAX_PASSWORD_BYTES = 72
