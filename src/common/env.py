"""Environment configuration interface for the book catalog API.

This module provides a clean interface for accessing environment variables,
centralizing all environment variable access in one place.
"""

import os

from dotenv import load_dotenv

# Load environment variables from .env file if it exists
load_dotenv()


class Environment:
    """Interface for accessing environment configuration."""

    @staticmethod
    def database_type() -> str:
        """Get the document store type (mongodb or memory).

        Returns:
            Store type, defaults to 'mongodb'
        """
        return os.getenv("DATABASE_TYPE", "mongodb")

    @staticmethod
    def mongodb_uri() -> str | None:
        """Get the MongoDB connection string.

        Returns:
            Connection string, or None when unset
        """
        return os.getenv("MONGODB_URI") or None

    @staticmethod
    def mongodb_database() -> str:
        """Get the MongoDB database name.

        Used when the connection string does not name a database.

        Returns:
            Database name, defaults to 'library'
        """
        return os.getenv("MONGODB_DATABASE", "library")

    @staticmethod
    def jwt_secret() -> str | None:
        """Get the token signing secret.

        Returns:
            Secret, or None when unset
        """
        return os.getenv("JWT_SECRET") or None

    @staticmethod
    def token_ttl_minutes() -> int | None:
        """Get the token lifetime in minutes.

        Returns:
            Lifetime in minutes, or None for tokens that never expire
        """
        value = os.getenv("TOKEN_TTL_MINUTES")
        return int(value) if value else None

    @staticmethod
    def login_password() -> str:
        """Get the placeholder password accepted by login.

        Returns:
            Password, defaults to 'secret'
        """
        return os.getenv("LOGIN_PASSWORD", "secret")

    @staticmethod
    def server_host() -> str:
        """Get the interface the HTTP server binds to.

        Returns:
            Host, defaults to '0.0.0.0'
        """
        return os.getenv("SERVER_HOST", "0.0.0.0")

    @staticmethod
    def server_port() -> int:
        """Get the HTTP server port.

        Returns:
            Port, defaults to 4000
        """
        return int(os.getenv("SERVER_PORT", "4000"))


# Singleton instance for convenient access
env = Environment()
