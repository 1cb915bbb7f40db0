"""
HTTP 请求构造器

记录 HTTP 请求的请求方法、url、请求头和请求体，支持链式调用：

    XRequest.post("https://example.com/upload").header("X-Token", "abc").param("file", Path("a.png"))

请求体可以是普通参数（urlencoded 或 multipart）、字符串或文件，
可直接写出到任意二进制流，也可以转成 httpx.Request 交给 httpx.Client 发送。
"""

from __future__ import annotations

import hashlib
import io
import logging
import mimetypes
import random
import shutil
import time
from pathlib import Path
from typing import Any, BinaryIO, Protocol
from urllib.parse import unquote_plus, urlencode

import httpx

logger = logging.getLogger(__name__)

MIME_URLENCODED = "application/x-www-form-urlencoded"
MIME_MULTIPART = "multipart/form-data"
MIME_JSON = "application/json"
MIME_XML = "text/xml"

METHOD_GET = "GET"
METHOD_POST = "POST"
METHOD_PUT = "PUT"
METHOD_DELETE = "DELETE"

CHARSET_UTF8 = "utf-8"
CRLF = b"\r\n"
MINUS = b"--"


class RequestBuildError(Exception):
    """请求构造过程中的非法操作"""

    pass


def _kv_join(params: list[tuple[str, Any]]) -> str:
    """url 编码后用 & 连接，空格编码为 +"""
    return urlencode([(k, str(v)) for k, v in params], encoding=CHARSET_UTF8)


class Content(Protocol):
    """HTTP 请求体"""

    def content_type(self) -> str:
        """请求体的 MIME 类型"""
        ...

    def content_length(self) -> int:
        """请求体的长度，不确定时返回 -1，将使用 chunked 模式传输"""
        ...

    def write(self, stream: BinaryIO) -> None:
        """把请求体写出到二进制流"""
        ...


class ParamsContent:
    """参数请求体，有文件参数时为 multipart，否则为 urlencoded"""

    def __init__(self) -> None:
        self.params: list[tuple[str, Any]] = []
        self._boundary: str | None = None

    def is_multipart(self) -> bool:
        return any(isinstance(value, Path) for _, value in self.params)

    @property
    def boundary(self) -> str:
        if self._boundary is None:
            seed = f"multipart-{time.time_ns()}-{random.randint(0, 2**31)}"
            self._boundary = hashlib.md5(seed.encode("utf-8")).hexdigest()
        return self._boundary

    def urlencoded(self) -> bytes:
        return _kv_join(self.params).encode(CHARSET_UTF8)

    def content_type(self) -> str:
        if self.is_multipart():
            return f"{MIME_MULTIPART}; boundary={self.boundary}"
        return f"{MIME_URLENCODED}; charset={CHARSET_UTF8}"

    def content_length(self) -> int:
        if self.is_multipart():
            return -1
        return len(self.urlencoded())

    def write(self, stream: BinaryIO) -> None:
        if not self.is_multipart():
            stream.write(self.urlencoded())
            return

        boundary = self.boundary.encode("ascii")
        for key, value in self.params:
            stream.write(MINUS + boundary + CRLF)
            if isinstance(value, Path):
                mime = mimetypes.guess_type(value.name)[0] or "application/octet-stream"
                stream.write(
                    f'Content-Disposition: form-data; name="{key}"; filename="{value.name}"'.encode(CHARSET_UTF8)
                    + CRLF
                )
                stream.write(f"Content-Type: {mime}".encode(CHARSET_UTF8) + CRLF)
                stream.write(CRLF)
                with open(value, "rb") as f:
                    shutil.copyfileobj(f, stream)
            else:
                stream.write(f'Content-Disposition: form-data; name="{key}"'.encode(CHARSET_UTF8) + CRLF)
                stream.write(CRLF)
                stream.write(str(value).encode(CHARSET_UTF8))
            stream.write(CRLF)
        stream.write(MINUS + boundary + MINUS + CRLF)


class StringContent:
    """字符串请求体"""

    def __init__(self, mime: str, text: str | bytes):
        self.mime = mime
        self.data = text if isinstance(text, bytes) else text.encode(CHARSET_UTF8)

    def content_type(self) -> str:
        return self.mime

    def content_length(self) -> int:
        return len(self.data)

    def write(self, stream: BinaryIO) -> None:
        stream.write(self.data)


class FileContent:
    """文件请求体"""

    def __init__(self, mime: str, path: Path):
        self.mime = mime
        self.path = path

    def content_type(self) -> str:
        return self.mime

    def content_length(self) -> int:
        return self.path.stat().st_size

    def write(self, stream: BinaryIO) -> None:
        with open(self.path, "rb") as f:
            shutil.copyfileobj(f, stream)


class XRequest:
    """HTTP 请求，通过 get/post/put/delete 创建"""

    def __init__(self, method: str, url: str):
        if not url.lower().startswith(("http://", "https://")):
            raise ValueError(f"仅支持 HTTP 和 HTTPS 协议: {url}")

        self.method = method
        self._headers: list[tuple[str, str]] = []
        self._content: Content | None = None

        # 带参数的 url 将 uri 与参数分离，参数存入参数请求体
        uri, _, query = url.partition("?")
        self.uri = uri
        for pair in filter(None, query.split("&")):
            key, sep, value = pair.partition("=")
            if not sep:
                raise ValueError(f"请求的 url 有误: {url}")
            self.param(unquote_plus(key), unquote_plus(value))

    @classmethod
    def get(cls, url: str) -> "XRequest":
        return cls(METHOD_GET, url)

    @classmethod
    def post(cls, url: str) -> "XRequest":
        return cls(METHOD_POST, url)

    @classmethod
    def put(cls, url: str) -> "XRequest":
        return cls(METHOD_PUT, url)

    @classmethod
    def delete(cls, url: str) -> "XRequest":
        return cls(METHOD_DELETE, url)

    def header(self, key: str, value: str | None, clear: bool = False) -> "XRequest":
        """
        添加请求头。

        Args:
            key: 请求头名称
            value: 请求头值，None 表示不添加
            clear: True 先清除已有的同名请求头，False 追加
        """
        if clear:
            self._headers = [(k, v) for k, v in self._headers if k.lower() != key.lower()]
        if value is not None:
            self._headers.append((key, value))
        return self

    def param(self, key: str, value: Any, clear: bool = False) -> "XRequest":
        """
        添加请求参数，值为 Path 时作为文件上传（multipart）。

        Raises:
            RequestBuildError: 已设置了非参数类型的请求体
        """
        if self._content is None:
            self._content = ParamsContent()
        if not isinstance(self._content, ParamsContent):
            raise RequestBuildError(f"请求体 {type(self._content).__name__} 无法添加参数 {key}")

        params = self._content.params
        if clear:
            params[:] = [(k, v) for k, v in params if k != key]
        if value is not None:
            params.append((key, value))
        return self

    def content(self, mime_or_content: str | Content, body: str | bytes | Path | None = None) -> "XRequest":
        """设置请求体：content(mime, 字符串/字节/文件) 或 content(自定义 Content)"""
        if isinstance(mime_or_content, str):
            if body is None:
                raise RequestBuildError("缺少请求体内容")
            if isinstance(body, Path):
                self._content = FileContent(mime_or_content, body)
            else:
                self._content = StringContent(mime_or_content, body)
        else:
            self._content = mime_or_content
        return self

    def _params_in_url(self) -> bool:
        return self.method == METHOD_GET and isinstance(self._content, ParamsContent)

    def request_method(self) -> str:
        return self.method

    def request_url(self) -> str:
        """GET 请求有参数时自动拼接成带参数的 url"""
        if self._params_in_url() and self._content.params:
            return f"{self.uri}?{_kv_join(self._content.params)}"
        return self.uri

    def request_headers(self) -> list[tuple[str, str]]:
        """请求头列表，按请求体补上 Content-Type 和 Content-Length / Transfer-Encoding"""
        if self._content is not None and not self._params_in_url():
            self.header("Content-Type", self._content.content_type(), clear=True)
            length = self._content.content_length()
            if length >= 0:
                self.header("Content-Length", str(length), clear=True)
                self.header("Transfer-Encoding", None, clear=True)
            else:
                self.header("Transfer-Encoding", "chunked", clear=True)
                self.header("Content-Length", None, clear=True)
        return list(self._headers)

    def request_content(self) -> Content | None:
        """请求体；GET 的参数已拼进 url，返回 None"""
        if self._params_in_url():
            return None
        return self._content

    def write_content(self, stream: BinaryIO) -> None:
        content = self.request_content()
        if content is not None:
            content.write(stream)

    def to_httpx(self) -> httpx.Request:
        """转换成 httpx.Request，请求体一次性写入内存"""
        buffer = io.BytesIO()
        self.write_content(buffer)
        body = buffer.getvalue()

        headers = [
            (k, v)
            for k, v in self.request_headers()
            if k.lower() not in ("content-length", "transfer-encoding")
        ]
        logger.debug(f"构造请求: {self.method} {self.request_url()} ({len(body)} bytes)")
        return httpx.Request(self.method, self.request_url(), headers=headers, content=body or None)
