# src/api_practice/clients/http.py

from __future__ import annotations

import httpx


def make_timeout(connect_s: float, read_s: float) -> httpx.Timeout:
    """
    Every outbound call is bounded.

    Write and pool waits reuse the connect budget; reads get their own.
    """
    return httpx.Timeout(
        connect=connect_s,
        read=read_s,
        write=connect_s,
        pool=connect_s,
    )


def build_http_client(settings) -> httpx.Client:
    """
    One shared client for all adapters.

    httpx.Client is thread-safe, so the same instance serves every request
    worker. No automatic retries: the use cases never retry either.
    """
    timeout = make_timeout(
        connect_s=float(getattr(settings, "http_connect_timeout", 5.0)),
        read_s=float(getattr(settings, "http_read_timeout", 10.0)),
    )
    return httpx.Client(
        timeout=timeout,
        headers={"Accept": "application/json"},
        follow_redirects=False,
    )
