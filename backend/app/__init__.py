# backend/app/__init__.py
"""
Notion Page Dashboard backend application package.

This package contains:
- main: FastAPI application entrypoint
- notion: Notion API client and block -> HTML rendering
- pages: user -> Notion page lookup
- auth: bearer token validation and demo accounts
- dashboard: /functions/v1/get-notion-page request handler
"""
