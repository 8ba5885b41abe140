"""Command line interface for td-client."""
