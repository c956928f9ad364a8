"""
Clearable holder for secret material (key passwords).
Backed by a bytearray so the contents can be overwritten in place; use as a context
manager to guarantee zeroing on every exit path.
"""


class SecretBuffer:
    def __init__(self, value: "str | bytes | bytearray | SecretBuffer | None" = None):
        if value is None:
            self._buf = bytearray()
        elif isinstance(value, SecretBuffer):
            self._buf = bytearray(value._buf)
        elif isinstance(value, str):
            self._buf = bytearray(value.encode("utf-8"))
        else:
            self._buf = bytearray(value)

    def __len__(self) -> int:
        return len(self._buf)

    def __bool__(self) -> bool:
        return len(self._buf) > 0

    def __repr__(self) -> str:
        return "SecretBuffer(***)" if self._buf else "SecretBuffer()"

    def __enter__(self) -> "SecretBuffer":
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.clear()
        return False

    def reveal(self) -> bytes:
        """Copy of the secret as bytes, for APIs that only accept bytes. Keep its scope short."""
        return bytes(self._buf)

    def clear(self) -> None:
        """Overwrite every byte with zero, then empty the buffer."""
        for i in range(len(self._buf)):
            self._buf[i] = 0
        del self._buf[:]

    @property
    def cleared(self) -> bool:
        return not self._buf
