from __future__ import annotations


def _hunk_start(header: str) -> int | None:
    """Return the first new-file line of a ``@@ -a,b +c,d @@`` header, or None if unparsable."""
    try:
        new_file_range = header.split("+")[1].split(" ")[0]
        return int(new_file_range.split(",")[0])
    except (IndexError, ValueError):
        return None


def get_diff_positions(patch_text: str) -> dict[int, int]:
    """
    Maps added new-file line numbers to their GitHub diff positions.

    GitHub's commit comment API addresses lines by position in the file's
    patch. Position 1 is the line just below the first @@ header; counting
    then runs on through the rest of the patch, so every later @@ header
    takes a position of its own.
    Only added lines are mapped; they are the lines the commit introduced.
    """
    positions: dict[int, int] = {}
    diff_position = 0
    file_line: int | None = None
    in_patch = False

    for line in patch_text.splitlines():
        if line.startswith("@@"):
            file_line = _hunk_start(line)
            if in_patch:
                diff_position += 1
            in_patch = True
            continue

        diff_position += 1

        if line.startswith("+") and not line.startswith("+++"):
            if file_line is not None:
                positions[file_line] = diff_position
                file_line += 1
        elif line.startswith("-") and not line.startswith("---"):
            pass  # removed line, no new-file line number
        elif file_line is not None:
            file_line += 1

    return positions
