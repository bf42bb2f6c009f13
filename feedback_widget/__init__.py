"""Conversational feedback widget backend: chat-driven GitHub issue filing."""
