"""Ingestion helpers.

Everything that turns raw feed payloads into typed values lives here.
"""
