"""Outbound HTTP forwarding."""

from api_desk.infrastructure.http.request_forwarder import RequestForwarder, forward_request

__all__ = ["RequestForwarder", "forward_request"]
