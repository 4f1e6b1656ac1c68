"""Order management back end: customers, inventory lookups, sales orders and login."""

__version__ = "1.0.0"
