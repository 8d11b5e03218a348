"""Staging of multipart uploads on local disk."""

from __future__ import annotations

import logging
import os
import tempfile
from collections.abc import Iterator
from contextlib import contextmanager

from flask import current_app
from werkzeug.datastructures import FileStorage
from werkzeug.utils import secure_filename

log = logging.getLogger(__name__)


@contextmanager
def staged_upload(file: FileStorage | None) -> Iterator[str | None]:
    """
    Save ``file`` to a temporary path and remove it on exit.

    Yields ``None`` when no file (or an empty filename) was sent. The staged
    file is deleted whether the block succeeds or raises.

    :param file: Uploaded part from ``request.files``.
    :type file: werkzeug.datastructures.FileStorage | None
    """
    if file is None or not file.filename:
        yield None
        return

    suffix = "-" + (secure_filename(file.filename) or "upload")
    fd, path = tempfile.mkstemp(suffix=suffix, dir=current_app.config.get("UPLOAD_TMP_DIR"))
    try:
        with os.fdopen(fd, "wb") as fh:
            file.save(fh)
        yield path
    finally:
        try:
            os.remove(path)
        except FileNotFoundError:
            pass
        except OSError:
            log.warning("upload.cleanup_failed", exc_info=True)
