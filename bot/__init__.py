"""
Command surface.

Slash-command style entry points that a chat-platform connector calls
with an `Interaction` and renders as a `Reply`.
"""
