class InvalidConfiguration(ValueError):
    """Raised for board parameters that cannot produce a playable grid."""
