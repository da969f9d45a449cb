"""Dispatch trace file.

Language service hosts usually own stdout and stderr, so decisions taken
while answering editor requests (which template took a request, how many
results a merge produced) are appended to a plain trace file instead.

TMPL_LENS_TRACE_LOG names the file. An empty value turns tracing off; when
the variable is unset, `tmpl_lens_trace.log` in the temp directory is used.

Usage:
    from tmpl_lens.trace import trace

    trace("Decorator", "replace get_quick_info_at_position app.ts@120")
    trace("Plugin", "initialize failed", include_traceback=True)
"""

import os
import tempfile
import traceback
from datetime import datetime
from pathlib import Path
from typing import List, Optional, Set

TRACE_ENV_VAR = "TMPL_LENS_TRACE_LOG"
DEFAULT_TRACE_FILENAME = "tmpl_lens_trace.log"

# Parent directories created so far in this process.
_created_dirs: Set[Path] = set()


def resolve_trace_path(
    *env_vars: str,
    default_filename: str = DEFAULT_TRACE_FILENAME,
) -> Optional[str]:
    """Pick the trace file from the first environment variable that is set.

    Returns None when that variable is set to an empty string.
    """
    for var in env_vars:
        if var not in os.environ:
            continue
        value = os.environ[var]
        return value or None

    return os.path.join(tempfile.gettempdir(), default_filename)


def _trace_lines(component: str, msg: str, include_traceback: bool) -> List[str]:
    stamp = datetime.now().strftime("%H:%M:%S.%f")[:-3]
    lines = [f"[{stamp}] [{component}] {msg}\n"]
    if include_traceback:
        tb = traceback.format_exc()
        if tb.strip() != "NoneType: None":
            lines.append(f"[{stamp}] [{component}] Traceback:\n{tb}\n")
    return lines


def trace_write(
    component: str,
    msg: str,
    trace_path: Optional[str],
    *,
    include_traceback: bool = False,
) -> None:
    """Append one trace entry to `trace_path`.

    Does nothing when `trace_path` is empty. I/O errors are dropped so a
    broken trace file never fails an editor request.
    """
    if not trace_path:
        return

    path = Path(trace_path)
    try:
        if path.parent not in _created_dirs:
            path.parent.mkdir(parents=True, exist_ok=True)
            _created_dirs.add(path.parent)
        with path.open("a", encoding="utf-8") as f:
            f.writelines(_trace_lines(component, msg, include_traceback))
    except OSError:
        pass


def trace(component: str, msg: str, *, include_traceback: bool = False) -> None:
    """Append one trace entry to the file named by TMPL_LENS_TRACE_LOG."""
    trace_write(
        component,
        msg,
        resolve_trace_path(TRACE_ENV_VAR),
        include_traceback=include_traceback,
    )
