"""Business services for accounts and sessions."""
