"""Shared test doubles."""

import io

from pydantic import BaseModel


class TrackingBody(io.BytesIO):
    """In-memory response body that counts its reads and closes."""

    def __init__(self, data: bytes = b"", chunk_size: int = 0) -> None:
        super().__init__(data)
        self.close_calls = 0
        self.read_calls = 0
        self.chunk_size = chunk_size

    def read(self, size=-1):
        self.read_calls += 1
        if self.chunk_size:
            size = self.chunk_size
        return super().read(size)

    def close(self) -> None:
        self.close_calls += 1
        super().close()


class SampleDTO(BaseModel):
    test: bool = False
    foo: str = ""
