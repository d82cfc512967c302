"""Shared utilities for zerotrust-engine."""
