"""
Integration tests package.

Contains integration tests that verify the interaction between
the store, the file storage and the console commands.
"""
