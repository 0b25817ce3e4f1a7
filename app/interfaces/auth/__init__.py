"""Session shapes and the acting-user dependency."""
