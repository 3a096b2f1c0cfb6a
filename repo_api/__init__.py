"""
repo_api: project repository service.

Exposes users, projects, components and releases over HTTP, and manages the
user ↔ project membership association table.
"""
