"""
High-level use cases for the clinic API.

Service modules orchestrate repositories to implement business rules
(signup, login). Routers call these services or the repositories, never the
durable store directly.
"""
