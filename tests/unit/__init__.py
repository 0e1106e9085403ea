"""Unit tests for individual components in isolation.

Coverage:
    - relay/: Configuration and the Kimi provider client
    - ui/: Reply formatting and the chat session controller

Follows single responsibility per test function. Leverages pytest-check
for multiple assertions per test.
"""
