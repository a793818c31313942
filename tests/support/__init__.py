"""Test-only fakes shared across test packages."""
