"""Row ID parsing."""


def parse_id(value: str | int) -> int:
    """Parse a row ID given as an int or a string of ASCII digits.

    Unicode digits such as "²" or "٣" are rejected; int() would not
    accept all of them and IDs never contain them.

    Raises:
        ValueError: If value is not a positive integer ID
    """
    # bool is an int subclass
    if isinstance(value, bool):
        raise ValueError(f"Invalid ID {value!r}")
    if isinstance(value, int):
        row_id = value
    elif isinstance(value, str) and value.strip().isascii() and value.strip().isdigit():
        row_id = int(value.strip())
    else:
        raise ValueError(f"Invalid ID {value!r}")
    if row_id <= 0:
        raise ValueError(f"Invalid ID {value!r}")
    return row_id
