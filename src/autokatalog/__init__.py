"""autokatalog - vehicle listing catalog with CSV import and admin CLI."""

__version__ = "0.1.0"
