"""fqdnproxy — stored FQDN query configurations and an authenticated HTTPS GET proxy."""

__version__ = "1.0.0"
