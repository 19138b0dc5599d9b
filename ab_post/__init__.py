"""
ab_post: 基于共享连接池的 POST 请求工具
"""

from ab_post.converter import ResponseStream, ResponseType
from ab_post.exceptions import PostHelperError, PostValidationError
from ab_post.formatter import ResponseWrapper
from ab_post.helper import (
    send_post_by_form,
    send_post_by_form_for_response_wrapper,
    send_post_by_json,
    send_post_by_json_for_response_wrapper,
)
from ab_post.session import CallOptions, ProxyBasicAuth, SharedClient, shared_client

__all__ = [
    "CallOptions",
    "PostHelperError",
    "PostValidationError",
    "ProxyBasicAuth",
    "ResponseStream",
    "ResponseType",
    "ResponseWrapper",
    "SharedClient",
    "send_post_by_form",
    "send_post_by_form_for_response_wrapper",
    "send_post_by_json",
    "send_post_by_json_for_response_wrapper",
    "shared_client",
]
