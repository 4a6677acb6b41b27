from singlehost.schema import ApplicationConfig

__all__ = ["ApplicationConfig"]
