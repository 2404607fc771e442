# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Copilot-for-Consensus contributors

"""Tests for control-sequence stripping."""

import pytest

from logfacade.sanitize import strip_control_sequences


@pytest.mark.parametrize(
    "styled, plain",
    [
        ("plain text", "plain text"),
        ("\x1b[31mred\x1b[0m", "red"),
        ("\x1b[1;32;40mbold green\x1b[m done", "bold green done"),
        ("\x1b[2K\x1b[1Gprogress 50%", "progress 50%"),
        ("\x1b]0;window title\x07shell", "shell"),
        ("\x1b]8;;https://example.com\x1b\\link\x1b]8;;\x1b\\", "link"),
        ("ab\bc", "ac"),
        ("tab\tand\nnewline", "tab\tand\nnewline"),
        ("carriage\rreturn", "carriagereturn"),
        ("\x9b33mcsi8\x9b0m", "csi8"),
    ],
)
def test_strip_control_sequences(styled, plain):
    """Test that escape sequences are removed and plain text is kept."""
    assert strip_control_sequences(styled) == plain


def test_strip_is_idempotent():
    """Test that stripping clean text changes nothing."""
    once = strip_control_sequences("\x1b[36mcyan\x1b[0m")

    assert strip_control_sequences(once) == once
