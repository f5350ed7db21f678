"""Shared helpers for the ddl-tools command line tools."""
