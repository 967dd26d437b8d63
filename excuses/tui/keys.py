"""
Decoding of raw terminal input into key names.

Only what the TUI binds is recognised by name: arrows, ctrl+c, escape and
printable characters. Other control bytes are dropped.
"""
from typing import List

ESCAPE_SEQUENCES = {
    "\x1b[A": "up",
    "\x1b[B": "down",
    "\x1b[C": "right",
    "\x1b[D": "left",
    "\x1bOA": "up",
    "\x1bOB": "down",
    "\x1bOC": "right",
    "\x1bOD": "left",
}

CONTROL_KEYS = {
    "\x03": "ctrl+c",
    "\r": "enter",
    "\n": "enter",
}

def decode_keys(data: str) -> List[str]:
    """
    Split a chunk read from the terminal into key names.

    Example:
        >>> decode_keys("l\\x1b[Dq")
        ['l', 'left', 'q']
    """
    keys: List[str] = []
    i = 0
    while i < len(data):
        if data[i] == "\x1b":
            seq = data[i:i + 3]
            if seq in ESCAPE_SEQUENCES:
                keys.append(ESCAPE_SEQUENCES[seq])
                i += 3
                continue
            keys.append("esc")
            i += 1
            continue
        ch = data[i]
        if ch in CONTROL_KEYS:
            keys.append(CONTROL_KEYS[ch])
        elif ch.isprintable():
            keys.append(ch)
        i += 1
    return keys
