"""Parsing helpers for JSON:API query parameters and request bodies."""

from .query_params import parse_query_params
from .request_body import decode_request_body

__all__ = ["decode_request_body", "parse_query_params"]
