# utils/debug_dump.py


def dump(data: bytes) -> str:
    """
    Render bytes as upper-case hex pairs separated by dashes, e.g. "25-50-44-46".
    """
    return "-".join(f"{b:02X}" for b in data)


def dump_pretty(data: bytes, bytes_per_line: int = 32) -> str:
    """
    Classic hex dump: offset, hex bytes, then the printable text.

    Args:
        data: Bytes to dump
        bytes_per_line: Number of bytes shown on each line

    Returns:
        str: One line per chunk, each ending with a newline
    """
    lines = []
    for offset in range(0, len(data), bytes_per_line):
        chunk = data[offset:offset + bytes_per_line]
        hex_part = " ".join(f"{b:02x}" for b in chunk).ljust(bytes_per_line * 3)
        text_part = "".join("." if b < 32 else chr(b) for b in chunk)
        lines.append(f"{offset:08x} {hex_part} {text_part}\n")
    return "".join(lines)
