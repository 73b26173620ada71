"""Pydantic AI agents for Gemini text tasks."""
