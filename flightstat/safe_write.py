"""
Write report files without leaving half-written output behind.

The report is written to a temporary file next to the target and moved
into place only once writing succeeded.
"""

import os
import tempfile
from contextlib import contextmanager


@contextmanager
def replace_on_success(output_file):
    """Yield a temporary path that replaces output_file on success.

    Args:
        output_file: Final path of the report.

    Yields:
        Path of the temporary file to write to.
    """
    output_dir = os.path.dirname(os.path.abspath(output_file))
    suffix = os.path.splitext(output_file)[1]
    fd, tmp_path = tempfile.mkstemp(prefix='.flightstat-', suffix=suffix, dir=output_dir)
    os.close(fd)
    try:
        yield tmp_path
        os.replace(tmp_path, output_file)
    finally:
        if os.path.exists(tmp_path):
            os.remove(tmp_path)
