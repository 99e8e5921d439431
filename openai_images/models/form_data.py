"""multipart/form-data encoding for image uploads

Entries are one of two frozen dataclasses, StringField or FileField. Both
validate themselves at construction so that encode_multipart never fails
halfway through a body.
"""
import re
import uuid
from dataclasses import dataclass
from typing import Iterable, List, Union

from openai_images.exceptions.images_exceptions import EncodingError

CRLF = b"\r\n"
BOUNDARY_PREFIX = "----openai-images-"

# Header values are written between double quotes on a single line
_UNSAFE_HEADER_VALUE = re.compile(r'["\x00-\x1f\x7f]')


def _check_name(name: str) -> None:
    if not isinstance(name, str) or not name:
        raise EncodingError("form field name must be a non-empty string", field="name")
    if _UNSAFE_HEADER_VALUE.search(name):
        raise EncodingError(f"form field name {name!r} contains quotes or control characters", field="name")


@dataclass(frozen=True)
class StringField:
    """A plain text form field"""
    name: str
    value: str

    def __post_init__(self):
        _check_name(self.name)
        if not isinstance(self.value, str):
            raise EncodingError(f"value of field {self.name!r} must be a string", field=self.name)


@dataclass(frozen=True)
class FileField:
    """A file attachment form field"""
    name: str
    file_name: str
    data: bytes
    content_type: str

    def __post_init__(self):
        _check_name(self.name)
        if not isinstance(self.file_name, str) or _UNSAFE_HEADER_VALUE.search(self.file_name):
            raise EncodingError(
                f"file name {self.file_name!r} contains quotes or control characters", field=self.name
            )
        if not isinstance(self.content_type, str) or not self.content_type or "\r" in self.content_type or "\n" in self.content_type:
            raise EncodingError(f"invalid content type {self.content_type!r}", field=self.name)
        if not isinstance(self.data, bytes):
            try:
                # bytearray and memoryview are copied so later mutation cannot leak in
                object.__setattr__(self, "data", bytes(memoryview(self.data)))
            except TypeError as e:
                raise EncodingError(f"data of field {self.name!r} is not bytes-like", field=self.name) from e


FormEntry = Union[StringField, FileField]


@dataclass(frozen=True)
class MultipartBody:
    """An encoded multipart body and the boundary that delimits it"""
    boundary: str
    body: bytes

    @property
    def content_type(self) -> str:
        return f"multipart/form-data; boundary={self.boundary}"


def new_boundary() -> str:
    """Return a fresh random boundary token"""
    return BOUNDARY_PREFIX + uuid.uuid4().hex


def encode_multipart(entries: Iterable[FormEntry]) -> MultipartBody:
    """Encode entries as multipart/form-data, preserving their order.

    Repeated names produce one part each. File bytes and content types are
    written verbatim.

    Raises:
        EncodingError: if an item is not a StringField or FileField
    """
    boundary = new_boundary()
    delimiter = f"--{boundary}".encode("ascii")
    parts: List[bytes] = []

    for entry in entries:
        parts.append(delimiter + CRLF)
        if isinstance(entry, StringField):
            parts.append(f'Content-Disposition: form-data; name="{entry.name}"'.encode("utf-8") + CRLF)
            parts.append(CRLF)
            parts.append(entry.value.encode("utf-8"))
        elif isinstance(entry, FileField):
            parts.append(
                f'Content-Disposition: form-data; name="{entry.name}"; filename="{entry.file_name}"'.encode("utf-8")
                + CRLF
            )
            parts.append(f"Content-Type: {entry.content_type}".encode("utf-8") + CRLF)
            parts.append(CRLF)
            parts.append(entry.data)
        else:
            raise EncodingError(f"unsupported form entry: {type(entry).__name__}")
        parts.append(CRLF)

    parts.append(delimiter + b"--" + CRLF)
    return MultipartBody(boundary=boundary, body=b"".join(parts))
