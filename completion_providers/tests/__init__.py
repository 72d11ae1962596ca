"""Test suite for completion_providers."""
