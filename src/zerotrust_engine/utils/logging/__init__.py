"""Logging setup for zerotrust-engine."""

from zerotrust_engine.utils.logging.logger_setup import ROOT_LOGGER_NAME, ISO8601Formatter, setup_logging

__all__ = ["ISO8601Formatter", "ROOT_LOGGER_NAME", "setup_logging"]
