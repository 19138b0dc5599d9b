"""
响应包装模块

把状态码、状态描述和转换后的响应体包装成一个对象，供 *_for_response_wrapper 系列方法返回
"""

from dataclasses import dataclass
from typing import Any, Generic, TypeVar

import requests

T = TypeVar("T")


@dataclass
class ResponseWrapper(Generic[T]):
    """
    响应包装对象

    属性:
        response_code: HTTP 状态码
        response_message: HTTP 状态描述（如 "OK"）
        response_data: 转换后的响应体；目标类型不受支持时为 None
    """

    response_code: int = 0
    response_message: str = ""
    response_data: T | None = None


def wrap_response(response: requests.Response, data: Any) -> ResponseWrapper:
    """
    根据响应状态行和转换结果生成包装对象

    参数:
        response: requests.Response 对象
        data: 转换后的响应体

    返回:
        ResponseWrapper 实例
    """
    return ResponseWrapper(
        response_code=response.status_code,
        response_message=response.reason or "",
        response_data=data,
    )
