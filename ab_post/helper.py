"""
POST 请求工具核心模块

提供通过共享连接池发送 POST 请求的便捷方法，请求体可以是 JSON 或表单格式：
- send_post_by_json / send_post_by_form: 只返回转换后的响应体
- send_post_by_json_for_response_wrapper / send_post_by_form_for_response_wrapper:
  额外返回状态码和状态描述（ResponseWrapper）

每个方法都支持三种调用方式：只传必填参数、额外指定 timeout、完整指定 timeout 与代理。

注意事项:
    Response 不直接返回给调用方，所有方法在返回前都会关闭响应。
    唯一的例外是目标类型为 ResponseType.STREAM：此时返回的流接管了响应，
    调用方读完后必须关闭该流（推荐使用 with 语句）。

使用示例:
    # JSON 请求体，期望返回字符串
    text = send_post_by_json(API_URL, None, req_json, str)

    # 通过代理发送 JSON 请求，超时 30 秒
    text = send_post_by_json(
        API_URL, None, req_json, ResponseType.TEXT,
        timeout=30 * 1000,
        proxy="http://proxy.example.com:8080",
        proxy_username="PROXY_ACC",
        proxy_password="PROXY_PWD",
    )

    # 表单请求体，指定请求头，期望返回 bytearray，并获取状态码
    wrapper = send_post_by_form_for_response_wrapper(API_URL, headers, req_form, bytearray)
    wrapper.response_code     # 200
    wrapper.response_message  # "OK"
    wrapper.response_data     # bytearray(...)

作者: HACK-WU
"""

import logging
import os
from collections.abc import Mapping
from contextlib import ExitStack, contextmanager
from typing import Any, BinaryIO

from ab_post.constants import CONTENT_TYPE_FORM, CONTENT_TYPE_JSON, LOG_FORMAT, USE_DEFAULT_TIMEOUT
from ab_post.converter import ResponseType, convert, owns_response
from ab_post.exceptions import PostValidationError
from ab_post.formatter import ResponseWrapper, wrap_response
from ab_post.session import shared_client

logging.basicConfig(level=logging.INFO, format=LOG_FORMAT)
logger = logging.getLogger(__name__)

Body = str | bytes | bytearray | memoryview | os.PathLike
Proxy = str | Mapping[str, str] | None


def _build_payload(body: Any, scope: ExitStack) -> bytes | BinaryIO:
    """
    把请求体转换为 requests 可发送的数据

    参数:
        body: 字符串、字节序列或文件路径
        scope: 用于登记需要关闭的文件句柄

    返回:
        bytes 或已打开的二进制文件对象

    异常:
        PostValidationError: 请求体类型不受支持时抛出
    """
    if isinstance(body, str):
        return body.encode("utf-8")
    if isinstance(body, (bytes, bytearray, memoryview)):
        return bytes(body)
    if isinstance(body, os.PathLike):
        return scope.enter_context(open(body, "rb"))
    raise PostValidationError(f"illegal param type: {type(body)}")


def _build_headers(headers: Mapping[str, str] | None, content_type: str) -> dict[str, str]:
    request_headers = dict(headers) if headers else {}
    # Content-Type 总是以内容类型参数为准
    for key in [k for k in request_headers if k.lower() == "content-type"]:
        del request_headers[key]
    request_headers["Content-Type"] = content_type
    return request_headers


@contextmanager
def _send_post(
    url: str,
    content_type: str,
    headers: Mapping[str, str] | None,
    body: Any,
    timeout: int,
    proxy: Proxy,
    proxy_username: str | None,
    proxy_password: str | None,
):
    """
    sendPost 系列方法的核心，只供模块内部使用

    以上下文管理器的形式产出 (response, scope)：退出 with 语句时 scope 会关闭响应。
    需要把响应交给调用方时（字节流），在 scope 上调用 pop_all() 转移所有权。

    参数:
        url: 请求地址
        content_type: 内容类型，会覆盖 headers 中的 Content-Type
        headers: 请求头，可为 None
        body: 请求体，只能是 str、bytes/bytearray/memoryview 或文件路径
        timeout: 毫秒。-1 使用共享客户端默认值，0 不限制
        proxy: 代理地址，如 "http://proxy.example.com:8080"
        proxy_username: 代理账号
        proxy_password: 代理密码

    执行步骤:
        1. 校验 url 和请求体，任何网络 I/O 之前失败
        2. 从共享客户端派生单次调用配置（同时校验超时参数），在打开文件之前完成
        3. 构建请求体，文件句柄在请求完成后关闭
        4. 复制请求头并设置 Content-Type
        5. 同步执行请求，产出响应

    异常:
        PostValidationError: 参数非法
        requests.exceptions.RequestException: 连接、读写或代理认证失败，原样抛出
    """
    if not isinstance(url, str) or not url.strip():
        raise PostValidationError("url is blank")
    if body is None:
        raise PostValidationError("The POST request must have a body.")
    options = shared_client.derive(timeout, proxy, proxy_username, proxy_password)

    with ExitStack() as body_scope:
        payload = _build_payload(body, body_scope)
        request_headers = _build_headers(headers, content_type)

        logger.debug(f"Starting POST request to {url} ({content_type})")
        response = shared_client.execute("POST", url, options, headers=request_headers, data=payload, stream=True)
        logger.debug(f"Received {response.status_code} response from {url}")

    with ExitStack() as response_scope:
        response_scope.callback(response.close)
        yield response, response_scope


def _post(
    url: str,
    content_type: str,
    headers: Mapping[str, str] | None,
    body: Any,
    response_type: Any,
    timeout: int,
    proxy: Proxy,
    proxy_username: str | None,
    proxy_password: str | None,
    wrap: bool,
) -> Any:
    target = ResponseType.resolve(response_type)
    with _send_post(url, content_type, headers, body, timeout, proxy, proxy_username, proxy_password) as (
        response,
        scope,
    ):
        data = convert(target, response)
        result = wrap_response(response, data) if wrap else data
        if owns_response(data):
            # 字节流接管响应，关闭流时才释放连接
            scope.pop_all()
            logger.debug(f"Response from {url} handed over to stream")
    return result


# ========== send_post_by_json ==========
def send_post_by_json(
    url: str,
    headers: Mapping[str, str] | None,
    json: Body,
    response_type: Any,
    timeout: int = USE_DEFAULT_TIMEOUT,
    proxy: Proxy = None,
    proxy_username: str | None = None,
    proxy_password: str | None = None,
) -> Any:
    """发送 JSON 请求体的 POST 请求，返回转换后的响应体"""
    return _post(
        url, CONTENT_TYPE_JSON, headers, json, response_type, timeout, proxy, proxy_username, proxy_password, False
    )


# ========== send_post_by_json_for_response_wrapper ==========
def send_post_by_json_for_response_wrapper(
    url: str,
    headers: Mapping[str, str] | None,
    json: Body,
    response_type: Any,
    timeout: int = USE_DEFAULT_TIMEOUT,
    proxy: Proxy = None,
    proxy_username: str | None = None,
    proxy_password: str | None = None,
) -> ResponseWrapper:
    """发送 JSON 请求体的 POST 请求，返回包含状态码、状态描述和响应体的 ResponseWrapper"""
    return _post(
        url, CONTENT_TYPE_JSON, headers, json, response_type, timeout, proxy, proxy_username, proxy_password, True
    )


# ========== send_post_by_form ==========
def send_post_by_form(
    url: str,
    headers: Mapping[str, str] | None,
    form: Body,
    response_type: Any,
    timeout: int = USE_DEFAULT_TIMEOUT,
    proxy: Proxy = None,
    proxy_username: str | None = None,
    proxy_password: str | None = None,
) -> Any:
    """发送表单请求体（已编码的 a=1&b=2 字符串）的 POST 请求，返回转换后的响应体"""
    return _post(
        url, CONTENT_TYPE_FORM, headers, form, response_type, timeout, proxy, proxy_username, proxy_password, False
    )


# ========== send_post_by_form_for_response_wrapper ==========
def send_post_by_form_for_response_wrapper(
    url: str,
    headers: Mapping[str, str] | None,
    form: Body,
    response_type: Any,
    timeout: int = USE_DEFAULT_TIMEOUT,
    proxy: Proxy = None,
    proxy_username: str | None = None,
    proxy_password: str | None = None,
) -> ResponseWrapper:
    """发送表单请求体的 POST 请求，返回 ResponseWrapper"""
    return _post(
        url, CONTENT_TYPE_FORM, headers, form, response_type, timeout, proxy, proxy_username, proxy_password, True
    )
