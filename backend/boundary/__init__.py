"""
Boundary layer for external system integrations.

Handles interactions with the relational store. The model provider adapter
lives in backend.core.completion_streamer.
"""
