"""Provider-specific request builders and response parsers."""
