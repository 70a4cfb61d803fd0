#!/usr/bin/env python3
"""Generate a bearer token for manual API testing (curl, HTTP clients)."""

import sys

from dotenv import load_dotenv

from backend.src.services.auth import AuthService
from backend.src.services.config import get_config


def generate_token(username="demo"):
    """Generate a one-hour token for the given username."""
    try:
        config = get_config()
        auth_service = AuthService(config=config)

        token, expires_at = auth_service.issue_token(username)

        print(f"Generated token for '{username}' (expires {expires_at.isoformat()}):")
        print(f"Authorization: Bearer {token}")
        print("\nExample:")
        print(f'curl -H "Authorization: Bearer {token}" http://localhost:{config.port}/tasks')

        return token

    except ValueError as e:
        print(f"Error generating token: {e}")
        print("Make sure JWT_SECRET is set in your environment or .env file")
        return None


if __name__ == "__main__":
    load_dotenv()
    username = sys.argv[1] if len(sys.argv) > 1 else "demo"
    generate_token(username)
