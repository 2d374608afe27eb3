"""Authentication.

Learn: Users sign in with username/password and receive a JWT access
token. Every protected request carries it as a Bearer token; the
dependency in auth.dependencies verifies it and re-loads the user, whose
id then scopes every task query.
"""
