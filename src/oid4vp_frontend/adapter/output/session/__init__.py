"""Session adapters"""

from oid4vp_frontend.adapter.output.session.in_memory_session import InMemorySession, InMemorySessionStore

__all__ = ["InMemorySession", "InMemorySessionStore"]
