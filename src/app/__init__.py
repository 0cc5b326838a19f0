"""Users API.

Layered user management: HTTP handlers over a user service, which hashes
passwords and sends welcome notifications, over SQLModel repositories.
"""

__version__ = "0.1.0"
