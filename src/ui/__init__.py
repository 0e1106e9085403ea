"""NiceGUI interface - thin visualization layer for chat interactions.

Responsibilities:
    - Chat message display with formatted assistant replies
    - File picking and drag-and-drop with image previews
    - New chat (reset) handling

Contains minimal business logic. Delegates all provider calls to the API.
"""
