# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Copilot-for-Consensus contributors

"""Terminal control-sequence stripping."""

import re

# CSI (colors, cursor movement), OSC (titles, hyperlinks) and two-byte ESC sequences
_CONTROL_SEQUENCE = re.compile(
    r"""
    \x1b\[[0-?]*[ -/]*[@-~]             # CSI ... final byte
    | \x1b\][^\x07\x1b]*(?:\x07|\x1b\\)  # OSC ... BEL or ST
    | \x1b[@-Z\\-_]                     # other Fe escapes
    | \x9b[0-?]*[ -/]*[@-~]             # 8-bit CSI
    """,
    re.VERBOSE,
)

# Remaining C0 controls except tab and newline
_STRAY_CONTROL = re.compile(r"[\x00-\x08\x0b-\x1f\x7f]")


def strip_control_sequences(text: str) -> str:
    """Remove terminal escape sequences and stray control characters.

    Backspaces erase the preceding character, the way a terminal would
    render them, so ``"ab\\bc"`` becomes ``"ac"``.

    Args:
        text: Possibly styled text

    Returns:
        Plain text
    """
    text = _CONTROL_SEQUENCE.sub("", text)
    if "\b" in text:
        out: list[str] = []
        for ch in text:
            if ch == "\b":
                if out:
                    out.pop()
                continue
            out.append(ch)
        text = "".join(out)
    return _STRAY_CONTROL.sub("", text)
