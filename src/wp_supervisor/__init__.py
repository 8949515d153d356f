"""wp-supervisor: server software status for WordPress hosts."""

__version__ = "1.1.0"
