"""Infrastructure - connection pool and logging setup."""
