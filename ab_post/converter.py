"""
响应体转换模块

根据目标表示形式把响应体转换为对应对象。目前支持：
- TEXT: 以 UTF-8 解码的字符串
- BYTE_ARRAY: 可变的 bytearray
- STREAM: 绑定在响应上的单次可读字节流，关闭流即关闭响应
- BYTE_STRING: 不可变的 bytes

新增表示形式只需增加枚举成员并注册对应的转换函数。
"""

import io
import logging
import typing
from collections.abc import Callable
from enum import Enum
from typing import Any

import requests

from ab_post.constants import LOG_FORMAT, STREAM_CHUNK_SIZE

logging.basicConfig(level=logging.INFO, format=LOG_FORMAT)
logger = logging.getLogger(__name__)


class ResponseType(Enum):
    """响应体的目标表示形式"""

    TEXT = "text"
    BYTE_ARRAY = "byte_array"
    STREAM = "stream"
    BYTE_STRING = "byte_string"

    @classmethod
    def resolve(cls, target: Any) -> "ResponseType | None":
        """
        把调用方传入的目标类型解析为枚举成员

        参数:
            target: 枚举成员、成员名称或取值字符串，或者转换结果对应的 Python 类型

        返回:
            ResponseType 成员；无法识别时返回 None，不抛出异常
        """
        if isinstance(target, cls):
            return target
        if isinstance(target, str):
            if target in cls.__members__:
                return cls[target]
            try:
                return cls(target)
            except ValueError:
                return None
        if target is str:
            return cls.TEXT
        if target is bytearray:
            return cls.BYTE_ARRAY
        if target is bytes:
            return cls.BYTE_STRING
        if target is typing.BinaryIO or (isinstance(target, type) and issubclass(target, io.IOBase)):
            return cls.STREAM
        return None


class ResponseStream(io.RawIOBase):
    """
    响应体字节流

    直接从 urllib3 原始响应读取（会处理 gzip 等内容编码），只能顺序读取一次。
    流持有响应的所有权：close() 会同时关闭响应并释放连接。

    参数:
        response: 以 stream=True 方式获得、尚未读取的 requests.Response
    """

    def __init__(self, response: requests.Response):
        super().__init__()
        self._response = response
        self._raw = response.raw

    def readable(self) -> bool:
        return True

    def readinto(self, b) -> int:
        if self.closed:
            raise ValueError("I/O operation on closed stream.")
        data = self._raw.read(len(b), decode_content=True)
        n = len(data)
        b[:n] = data
        return n

    def close(self):
        if not self.closed:
            self._response.close()
            logger.debug(f"Response stream for {self._response.url} closed")
        super().close()


def _read_all(response: requests.Response) -> bytes:
    # response.content 会一次性读完并解码内容编码
    return response.content


def to_text(response: requests.Response) -> str:
    return _read_all(response).decode("utf-8")


def to_byte_array(response: requests.Response) -> bytearray:
    return bytearray(_read_all(response))


def to_stream(response: requests.Response) -> io.BufferedReader:
    return io.BufferedReader(ResponseStream(response), buffer_size=STREAM_CHUNK_SIZE)


def to_byte_string(response: requests.Response) -> bytes:
    return bytes(_read_all(response))


_CONVERTERS: dict[ResponseType, Callable[[requests.Response], Any]] = {
    ResponseType.TEXT: to_text,
    ResponseType.BYTE_ARRAY: to_byte_array,
    ResponseType.STREAM: to_stream,
    ResponseType.BYTE_STRING: to_byte_string,
}


def convert(response_type: ResponseType | None, response: requests.Response) -> Any:
    """
    根据目标表示形式转换响应体

    参数:
        response_type: ResponseType.resolve() 的结果
        response: 尚未读取响应体的 requests.Response

    返回:
        转换后的对象；目标类型不受支持时返回 None

    注意:
        STREAM 返回的流持有响应，调用方读完后必须关闭它
    """
    converter = _CONVERTERS.get(response_type)
    if converter is None:
        return None
    return converter(response)


def owns_response(data: Any) -> bool:
    """判断转换结果是否接管了响应的所有权（即结果是一个活动的字节流）"""
    return isinstance(data, io.BufferedReader) and isinstance(data.raw, ResponseStream)
