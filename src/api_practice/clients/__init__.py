"""
Outbound HTTP adapters.

Components:
- http.py: shared httpx.Client with bounded timeouts
- user_validation.py: UserValidationClient over GET {base}/{userId}
- notification.py: best-effort NotificationClient over POST {url}
"""
