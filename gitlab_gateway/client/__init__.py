"""
GitLab API Client Module.

Architecture:
- client.py      httpx transport, auth header, error mapping
- endpoints.py   declarative table of GitLab operations
- pagination.py  lazy iteration over paged list endpoints
"""
