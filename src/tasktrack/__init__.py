"""tasktrack — multi-user task tracking backend.

Users sign up, sign in for a bearer token, and manage their own tasks.
Every task read and write is scoped to the authenticated owner.
"""

__version__ = "0.1.0"
