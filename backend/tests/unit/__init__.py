"""
Unit tests package.

Contains isolated unit tests for the codec, entities, services, storage
and configuration that run against in-memory state or a temporary
directory.
"""
