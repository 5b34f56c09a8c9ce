"""Snapshot export: async capture plus a client-side download.

`SnapshotExporter.export` never raises. A missing target or any
render/encode failure is logged and reported as `None`.
"""

from __future__ import annotations

import asyncio
import base64
import json
import logging
from typing import Optional

from streamlit_javascript import st_javascript

from ui.monster_memory.constants import EXPORT_FILE_NAME, EXPORT_SCALE
from ui.monster_memory.generation import SnapshotTarget, render_snapshot_png

logger = logging.getLogger(__name__)

IDLE = "idle"
EXPORTING = "exporting"


class SnapshotExporter:
    """Single-shot capture with an Idle/Exporting guard."""

    def __init__(self, scale: int = EXPORT_SCALE):
        self.scale = scale
        self.state = IDLE

    @property
    def busy(self) -> bool:
        return self.state == EXPORTING

    async def export(self, target: Optional[SnapshotTarget]) -> Optional[bytes]:
        if self.busy:
            logger.debug("Snapshot export already running; ignoring trigger")
            return None

        self.state = EXPORTING
        try:
            if target is None:
                raise ValueError("Nothing to capture: no snapshot target is mounted")
            return await asyncio.to_thread(render_snapshot_png, target, self.scale)
        except Exception:
            logger.exception("Error saving image")
            return None
        finally:
            self.state = IDLE


def _js_download(png: bytes, file_name: str) -> str:
    data_url = "data:image/png;base64," + base64.b64encode(png).decode("ascii")
    return (
        "(() => {"
        "try {"
        "  const a = document.createElement('a');"
        f"  a.href = {json.dumps(data_url)};"
        f"  a.download = {json.dumps(file_name)};"
        "  document.body.appendChild(a);"
        "  a.click();"
        "  a.remove();"
        "  return true;"
        "} catch (e) { return false; }"
        "})()"
    )


def trigger_download(png: bytes, key: str, file_name: str = EXPORT_FILE_NAME) -> None:
    """Ask the browser to save `png` as `file_name`."""
    st_javascript(_js_download(png, file_name), key=key)
