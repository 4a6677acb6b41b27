from typing import Tuple


def unpack_tags(tags: str | None) -> Tuple[Tuple[str, str], ...]:
    """Parse "key1=value1;key2=value2" into ordered (key, value) pairs.

    Whitespace around keys and values is dropped, as are empty segments.
    """
    if not tags:
        return ()

    tags_unpacked: list[Tuple[str, str]] = []
    for segment in tags.split(";"):
        if not segment.strip():
            continue
        key, sep, value = segment.partition("=")
        key, value = key.strip(), value.strip()
        if not sep or not key or "=" in value:
            raise ValueError(
                "Tags must be in the format 'key1=value1;key2=value2', "
                f"but instead got {tags}"
            )
        tags_unpacked.append((key, value))
    return tuple(tags_unpacked)
