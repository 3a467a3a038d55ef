import json
import traceback

class NewsdeskError(Exception):
    """Base exception for newsdesk"""
    def __init__(self, message: str, details: dict = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def to_dict(self) -> dict:
        return {
            "type": self.__class__.__name__,
            "message": self.message,
            "details": self.details,
        }

class ValidationError(NewsdeskError):
    """Bad region, dates or feed configuration"""
    pass

class ProviderError(NewsdeskError):
    """
    A news provider or the analysis backend failed.
    ``details`` carries ``provider`` and, for HTTP failures, ``status_code``.
    """

    @property
    def status_code(self):
        return self.details.get("status_code")

class UnknownError(NewsdeskError):
    """Unexpected errors"""
    pass

def error_payload(e: Exception) -> dict:
    """Build the JSON error envelope printed by the CLI."""
    if isinstance(e, NewsdeskError):
        error = e.to_dict()
    else:
        error = {
            "type": "UnknownError",
            "message": str(e),
            "details": {"traceback": traceback.format_exc().splitlines()},
        }

    return {
        "ok": False,
        "error": error,
        "meta": {
            "version": 1
        }
    }

def format_error(e: Exception) -> str:
    """Format exception as a JSON string."""
    return json.dumps(error_payload(e), indent=2)
