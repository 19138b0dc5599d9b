"""
POST 请求工具异常模块

只定义参数校验相关的异常；连接、读写、代理认证等传输层异常由 requests 原样抛出
"""


class PostHelperError(Exception):
    """
    POST 请求工具异常基类

    所有自定义异常的基类，用于统一捕获工具自身产生的错误
    """


class PostValidationError(PostHelperError, ValueError):
    """
    输入验证异常

    当 url 为空、缺少请求体、请求体类型不支持或超时参数非法时抛出。
    校验发生在任何网络 I/O 之前。
    """
