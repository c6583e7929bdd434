from .source import RawMessage, is_from_target  # noqa: F401
