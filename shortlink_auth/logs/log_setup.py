# Copyright Thales 2025
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.

#

from __future__ import annotations

import asyncio
import json
import logging
import sys
from typing import Any, Optional

from rich.logging import RichHandler

# Attributes every LogRecord carries; anything else was passed through `extra=`.
_RESERVED_ATTRS = frozenset(
    logging.LogRecord("", 0, "", 0, "", None, None).__dict__.keys()
) | {"message", "asctime", "task_name"}


# --- JSON formatter kept tiny and portable ---
class CompactJsonFormatter(logging.Formatter):
    def __init__(self, service_name: str):
        super().__init__()
        self.service = service_name

    def format(self, record: logging.LogRecord) -> str:
        base: dict[str, Any] = {
            "ts": record.created,
            "level": record.levelname,
            "logger": record.name,
            "file": record.filename,
            "line": record.lineno,
            "service": self.service,
            "msg": record.getMessage(),
        }
        extra = {
            k: v for k, v in record.__dict__.items() if k not in _RESERVED_ATTRS
        }
        if extra:
            base["extra"] = extra
        if record.exc_info:
            base["exc"] = self.formatException(record.exc_info)
        return json.dumps(base, ensure_ascii=False, default=str)


class TaskNameFilter(logging.Filter):
    def filter(self, record: logging.LogRecord) -> bool:
        """Adds the current asyncio Task name to the log record."""
        try:
            current_task: Optional[asyncio.Task[Any]] = asyncio.current_task()
            if current_task is not None:
                record.task_name = current_task.get_name() or str(id(current_task))
            else:
                record.task_name = "Main"
        except RuntimeError:
            # Not inside an asyncio loop (e.g., initial sync setup)
            record.task_name = "Sync"
        return True


def log_setup(
    *,
    service_name: str,
    log_level: str = "INFO",
    log_format: str = "rich",
    include_uvicorn: bool = True,
) -> None:
    root = logging.getLogger()
    root.setLevel(log_level.upper())
    marker = f"_shortlink_handlers_{service_name}"
    if getattr(root, marker, False):
        return
    for h in list(root.handlers):
        root.removeHandler(h)

    if log_format == "json":
        # Machine output for log collectors
        handler: logging.Handler = logging.StreamHandler(sys.stdout)
        handler.setFormatter(CompactJsonFormatter(service_name))
    else:
        # Human console
        handler = RichHandler(
            rich_tracebacks=False,
            show_time=False,
            show_level=True,
            show_path=True,
        )
        handler.setFormatter(
            logging.Formatter(
                fmt="%(asctime)s | %(levelname)s | [%(threadName)s/%(task_name)s] | %(message)s",
                datefmt="%Y-%m-%d %H:%M:%S",
            )
        )
        handler.addFilter(TaskNameFilter())
    handler.setLevel(log_level.upper())
    root.addHandler(handler)

    for noisy in ("grpc", "httpx", "asyncio"):
        lg = logging.getLogger(noisy)
        lg.setLevel(logging.WARNING)

    # Make uvicorn loggers flow into our handlers (no duplicates)
    if include_uvicorn:
        for name in ("uvicorn", "uvicorn.error", "uvicorn.access"):
            lg = logging.getLogger(name)
            lg.handlers.clear()
            lg.propagate = True

    setattr(root, marker, True)
