"""Adapters: SQL/in-memory stores, ARQ queue, SMTP transport and JWT auth."""
