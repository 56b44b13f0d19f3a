"""Domain layer — value model, tagged-text codec, and JSON projection.

This layer depends only on stdlib.
It must never import from services, commands, output, or config.
"""
