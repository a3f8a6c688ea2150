# deskkit/api_error/config_error.py
class ConfigurationError(RuntimeError):
    """
    Raised when application configuration is invalid or incomplete.
    Fatal at startup.
    """


__all__ = ["ConfigurationError"]
