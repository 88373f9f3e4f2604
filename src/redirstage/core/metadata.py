"""Typed document metadata.

Front matter values arrive as arbitrary parsed data. Metadata keeps them
behind case-insensitive keys and exposes explicit typed accessors that
fail loudly instead of coercing unexpected shapes.
"""

from collections.abc import Iterator, Mapping

MetadataValue = str | bool | list[str] | None


class MetadataTypeError(ValueError):
    """Raised when a metadata value does not have the requested shape."""

    def __init__(self, key: str, expected: str, value: object) -> None:
        self.key = key
        self.expected = expected
        self.value = value
        super().__init__(
            f"Metadata key '{key}' must be {expected}, got {type(value).__name__}"
        )


def normalize_key(key: str) -> str:
    """Normalize a metadata key for lookups.

    Keys are compared case-insensitively and ignore "-" and "_" separators,
    so "redirect-from", "redirect_from" and "RedirectFrom" are one key.
    """
    return key.replace("-", "").replace("_", "").lower()


class Metadata(Mapping[str, object]):
    """Read-only metadata bag with case-insensitive keys."""

    __slots__ = ("_values",)

    def __init__(self, values: Mapping[str, object] | None = None) -> None:
        self._values: dict[str, tuple[str, object]] = {}
        for key, value in (values or {}).items():
            self._values[normalize_key(key)] = (key, value)

    @classmethod
    def from_dict(cls, raw: object) -> "Metadata":
        """Create metadata from parsed front matter.

        Args:
            raw: Parsed front matter, expected to be a mapping

        Returns:
            Metadata instance (empty when raw is not a mapping)
        """
        if not isinstance(raw, Mapping):
            return cls()
        return cls({str(key): value for key, value in raw.items()})

    def __getitem__(self, key: str) -> object:
        return self._values[normalize_key(key)][1]

    def __iter__(self) -> Iterator[str]:
        return (original for original, _ in self._values.values())

    def __len__(self) -> int:
        return len(self._values)

    def __contains__(self, key: object) -> bool:
        return isinstance(key, str) and normalize_key(key) in self._values

    def __repr__(self) -> str:
        return f"Metadata({dict(self.items())!r})"

    def get_str(self, key: str) -> str | None:
        """Get a string value.

        Raises:
            MetadataTypeError: If the value is present but not a string
        """
        value = self.get(key)
        if value is None:
            return None
        if not isinstance(value, str):
            raise MetadataTypeError(key, "a string", value)
        return value

    def get_bool(self, key: str, default: bool = False) -> bool:
        """Get a boolean value, returning default when absent.

        Raises:
            MetadataTypeError: If the value is present but not a boolean
        """
        value = self.get(key)
        if value is None:
            return default
        if not isinstance(value, bool):
            raise MetadataTypeError(key, "a boolean", value)
        return value

    def get_str_list(self, key: str) -> list[str] | None:
        """Get a value as a sequence of strings.

        A single string is returned as a one-item list. Lists and tuples must
        contain only strings.

        Args:
            key: Metadata key

        Returns:
            List of strings, or None when the key is absent

        Raises:
            MetadataTypeError: If the value is neither a string nor a
                sequence of strings
        """
        value = self.get(key)
        if value is None:
            return None
        if isinstance(value, str):
            return [value]
        if isinstance(value, (list, tuple)) and all(isinstance(item, str) for item in value):
            return list(value)
        raise MetadataTypeError(key, "a string or a list of strings", value)
