"""
Shared helpers.

- logger: get_logger, cached named loggers for the livescore namespace.
"""
