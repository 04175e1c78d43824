"""
Services Package

Business logic kept separate from HTTP handling (routers).

Current services:
- store.py: Genre and book persistence, one session per call
- rate_limiter.py: Rate limiting with slowapi
"""
