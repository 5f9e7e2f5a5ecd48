"""Framework glue: configuration, logging, errors, extensions, security."""
