"""Integration clients for the wrapped SaaS APIs (Cloudflare, GitLab, etc).

Keep these modules small and testable:
- No FastAPI request/response objects
- One client class per vendor, built from env via `from_env()`
- Pure IO + reshaping helpers
"""
