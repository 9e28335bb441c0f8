"""
VPC API client layer.

Provides HTTP communication with the shares and IAM APIs.
"""

from vpc_file.api.http_client import HttpClient, sanitize_for_log

__all__ = ["HttpClient", "sanitize_for_log"]
