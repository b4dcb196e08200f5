"""Generate typed GraphQL request classes from an introspected schema."""

__version__ = "0.1.0"
