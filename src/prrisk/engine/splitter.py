"""Split a unified diff into request-sized chunks at file boundaries."""

from __future__ import annotations

import structlog

from prrisk.errors import InputError

logger = structlog.get_logger()

FILE_BOUNDARY_PREFIX = "diff --git "


def is_file_boundary(line: str) -> bool:
    """True if `line` starts a new file's section of a unified diff."""
    return line.startswith(FILE_BOUNDARY_PREFIX)


def split_diff(diff: str, budget: int) -> list[str]:
    """Partition `diff` into ordered chunks of at most `budget` characters.

    A chunk is closed before every file-boundary line, and before any line
    that would push it past the budget. A single line longer than the budget
    becomes a chunk of its own rather than being cut or dropped. Blank lines
    that would form a chunk by themselves stay with a neighbouring chunk when
    it has room, and are dropped otherwise. Short of such a drop, joining the
    chunks with "\\n" gives back the original diff.

    Raises:
        ValueError: if budget is not positive.
        InputError: if the diff holds no non-whitespace content.
    """
    if budget <= 0:
        raise ValueError(f"chunk budget must be positive, got {budget}")

    chunks: list[str] = []
    current: list[str] = []
    current_size = 0

    for line in diff.split("\n"):
        # Joining adds one separator per line after the first
        added = len(line) + (1 if current else 0)

        if current and (is_file_boundary(line) or current_size + added > budget):
            chunks.append("\n".join(current))
            current = []
            current_size = 0
            added = len(line)

        current.append(line)
        current_size += added

    if current:
        chunks.append("\n".join(current))

    return _fold_blank_chunks(chunks, budget)


def _fold_blank_chunks(chunks: list[str], budget: int) -> list[str]:
    """Attach whitespace-only chunks to a neighbour instead of emitting them.

    A blank run goes onto the end of the previous chunk, or onto the start of
    the first real chunk when it leads the diff, but only while the merged
    chunk stays within budget. Runs that do not fit are dropped: they hold
    nothing to analyze, and keeping them would break the budget.
    """
    folded: list[str] = []
    leading: str | None = None
    dropped = 0

    for chunk in chunks:
        if chunk.strip():
            if leading is not None:
                if len(leading) + 1 + len(chunk) <= budget:
                    chunk = f"{leading}\n{chunk}"
                else:
                    dropped += 1
                leading = None
            folded.append(chunk)
        elif folded:
            if len(folded[-1]) + 1 + len(chunk) <= budget:
                folded[-1] = f"{folded[-1]}\n{chunk}"
            else:
                dropped += 1
        elif leading is None:
            leading = chunk
        else:
            # A leading run only spans several chunks when it overflows the budget
            dropped += 1

    if not folded:
        raise InputError("Diff has no content to split")

    if dropped:
        logger.debug("blank_chunks_dropped", dropped=dropped)

    return folded
