"""Tests for the accounts service."""
