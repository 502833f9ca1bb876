"""
Persistence adapters.

Durable stores (JSON files or a SQL database) behind one interface, the id
counters, and the in-memory entity repositories built on top of them.
Services and routers depend on the repositories, never on the store.
"""
