"""Core set storage and reconciliation logic for pkgsets."""
