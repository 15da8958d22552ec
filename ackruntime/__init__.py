"""Resource types, condition helpers, comparison, errors, metrics and configuration for cloud service controllers."""

__version__ = "0.1.0"