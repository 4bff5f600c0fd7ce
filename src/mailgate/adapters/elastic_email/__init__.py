"""Elastic Email adapter – query-parameter auth, XML status documents."""
from mailgate.adapters.elastic_email.adapter import UNAUTHORIZED_SENTINEL, ElasticEmailAdapter
from mailgate.adapters.elastic_email.builder import API_ENDPOINT, ElasticEmailRequestBuilder

__all__ = [
    "API_ENDPOINT",
    "UNAUTHORIZED_SENTINEL",
    "ElasticEmailAdapter",
    "ElasticEmailRequestBuilder",
]
