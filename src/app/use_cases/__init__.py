"""
Use Cases

Organized by domain folder:
- auth/: Authentication, sessions and password reset
- api_keys/: API key lifecycle
- users/: User moderation
- audit/: Audit logs
- admin/: Platform-wide admin operations
"""
