# Brisk CLI Framework — (c) 2025 rtj.dev LLC — MIT Licensed
"""
Tab completion for text prompts.

`complete_buffer` is a pure function of the current buffer and the completion
source:
- one matching candidate replaces the buffer;
- several candidates sharing a prefix longer than the buffer extend it to that
  longest common prefix;
- otherwise the buffer is unchanged and the candidates are offered for display.
"""
from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Iterable

from brisk.prompt.spec import CompletionSource


@dataclass(frozen=True)
class CompletionResult:
    buffer: str
    candidates: tuple[str, ...] = ()


def complete_buffer(buffer: str, source: CompletionSource | None) -> CompletionResult:
    """Apply one completion step to `buffer`."""
    if source is None:
        return CompletionResult(buffer)
    matches = tuple(
        dict.fromkeys(
            candidate for candidate in source(buffer) if candidate.startswith(buffer)
        )
    )
    if len(matches) == 1:
        return CompletionResult(matches[0])
    if not matches:
        return CompletionResult(buffer)
    common = os.path.commonprefix(list(matches))
    if len(common) > len(buffer):
        return CompletionResult(common, matches)
    return CompletionResult(buffer, matches)


def words_source(words: Iterable[str]) -> CompletionSource:
    """Completion source over a fixed word list, in the given order."""
    vocabulary = list(words)

    def source(prefix: str) -> list[str]:
        return [word for word in vocabulary if word.startswith(prefix)]

    return source
