"""Command-line interface for pkgsets."""
