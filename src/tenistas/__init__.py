"""Cache-aside player records with CSV, JSON and XML interchange."""

__version__ = "0.1.0"
