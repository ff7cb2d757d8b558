"""
Application exceptions raised below the API layer.

Endpoints translate these into HTTP responses through the handlers
registered in main.py.
"""


class BadRequestError(Exception):
    """Exception raised when client-supplied input cannot be used (HTTP 400)."""

    def __init__(self, message: str = "Bad Request"):
        super().__init__(message)
        self.message = message
